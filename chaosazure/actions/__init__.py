"""
Chaos 'actions' module.

This module contains *actions* that change the power state of a virtual
machine in a resource group.

Each *action* is a coroutine taking an async compute management client, a
resource group and a VM name. An *action* returns once the long running
operation it starts has completed, and raises whatever the management client
raises on failure. Deciding what a failure means (retry, abort, log) is left
to the caller; the operation pipeline aborts the run.

*Actions* applied to a system should not cause predictable failure. The
purpose of a chaos run is to expose weakness in the services hosted on the
VMs without causing systemic failure. If systemic failure is the result,
either a bug exists or the run is too aggressive.

Things to consider when adding or modifying *actions*:
1. *Actions* could/may be used outside of the chaos monkey for other kinds of
   integration or systems testing. Therefore, *actions* should be written in
   a way they can be reused outside of the operation pipeline.
"""
