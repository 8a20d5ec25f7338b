import random

from collections import namedtuple
from chaosazure.common import ConfigError, Operation
from chaosazure.delay import parse_delay
from logzero import logger

# end and delay are only set for compound operations (powercycle)
OperationPlan = namedtuple('OperationPlan', ['begin', 'end', 'delay'])


async def start_vm(client, resource_group: str, vm: str) -> None:
    """
    Start a virtual machine and wait for the operation to complete.

    :param client: An async ComputeManagementClient. Required.
    :type client: azure.mgmt.compute.aio.ComputeManagementClient
    :param resource_group: The VM's resource group. Required.
    :type resource_group: str
    :param vm: The VM name. Required.
    :type vm: str
    :return: None
    """
    logger.debug("Starting VM %s in resource group %s", vm, resource_group)
    poller = await client.virtual_machines.begin_start(resource_group, vm)
    await poller.result()


async def stop_vm(client, resource_group: str, vm: str) -> None:
    """
    Power off a virtual machine and wait for the operation to complete.

    The VM keeps its compute allocation (it is not deallocated), mirroring a
    pulled power cord rather than a graceful decommission.

    :param client: An async ComputeManagementClient. Required.
    :type client: azure.mgmt.compute.aio.ComputeManagementClient
    :param resource_group: The VM's resource group. Required.
    :type resource_group: str
    :param vm: The VM name. Required.
    :type vm: str
    :return: None
    """
    logger.debug("Powering off VM %s in resource group %s", vm,
                 resource_group)
    poller = await client.virtual_machines.begin_power_off(resource_group, vm)
    await poller.result()


async def restart_vm(client, resource_group: str, vm: str) -> None:
    """
    Restart a virtual machine and wait for the operation to complete.

    :param client: An async ComputeManagementClient. Required.
    :type client: azure.mgmt.compute.aio.ComputeManagementClient
    :param resource_group: The VM's resource group. Required.
    :type resource_group: str
    :param vm: The VM name. Required.
    :type vm: str
    :return: None
    """
    logger.debug("Restarting VM %s in resource group %s", vm, resource_group)
    poller = await client.virtual_machines.begin_restart(resource_group, vm)
    await poller.result()


def operation_plan(operation: str, delay: str = None,
                   rng=random) -> OperationPlan:
    """
    Map an operation name to the VM function(s) that carry it out.

    The delay is only parsed for powercycle, the one operation made of two
    calls.

    :param operation: One of start, stop, restart, powercycle. Required.
    :type operation: str
    :param delay: An integer or MIN-MAX range of seconds to wait between the
        stop and start of a powercycle.
        Optional. (Default: chaosazure.common.DEFAULT_CHAOS_DELAY)
    :type delay: str
    :param rng: Source of randomness for a delay range.
        Optional. (Default: the random module)
    :type rng: random.Random
    :return: OperationPlan
    """
    if not Operation.has_value(operation):
        raise ConfigError("Unsupported operation. Operation: "
                          "{}".format(operation))

    op = Operation(operation)
    if op is Operation.START:
        return OperationPlan(start_vm, None, None)
    if op is Operation.STOP:
        return OperationPlan(stop_vm, None, None)
    if op is Operation.RESTART:
        return OperationPlan(restart_vm, None, None)
    return OperationPlan(stop_vm, start_vm, parse_delay(delay, rng=rng))
