from logzero import logger
from typing import List


async def list_vms(client, resource_group: str) -> List[str]:
    """
    List the names of all virtual machines in a resource group.

    Paging is handled by the management client.

    :param client: An async ComputeManagementClient. Required.
    :type client: azure.mgmt.compute.aio.ComputeManagementClient
    :param resource_group: The resource group to list. Required.
    :type resource_group: str
    :return: List[str]
    """
    names = []
    async for vm in client.virtual_machines.list(resource_group):
        names.append(vm.name)
    logger.debug("VMs in resource group %s: %s", resource_group, names)
    return names
