"""
Chaos 'probes' module.

This module contains *probes* that gather information about the virtual
machines in a resource group without changing them.
"""
