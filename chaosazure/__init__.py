"""
chaosazure module

A chaos monkey for Azure virtual machines.

This module contains:
 - actions that change the power state of a VM. (actions directory)
 - probes that gather information about the VMs in a resource group.
   (probes directory)
 - the operation pipeline that authenticates, resolves a target VM and runs
   an operation against it. (pipeline.py)
 - resource selection and delay parsing. (selection.py, delay.py)
 - helper functions (helpers.py file)
 - common defaults, enums and errors (common directory)
 - the command-line front-end. (cli.py)

A run operates on exactly one VM. The VM is either named explicitly or chosen
at random from the resource group, optionally filtered by a regular
expression. Supported operations are start, stop, restart and powercycle. A
powercycle stops the VM, waits (a fixed number of seconds or a random number
within a MIN-MAX range) and starts it again.

Every step of a run must succeed for the next to execute. The first failure
aborts the run and nothing is rolled back: if the stop half of a powercycle
succeeds and the start half fails, the VM is left stopped.

Things to consider when adding or modifying operations:
1. Actions and probes could/may be used outside of the chaos monkey for other
   kinds of integration or systems testing. Therefore, they should take the
   management client as an argument rather than building their own.
"""
