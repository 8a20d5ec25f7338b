import asyncio
import random

from azure.core.exceptions import AzureError
from azure.identity.aio import ClientSecretCredential
from azure.mgmt.compute.aio import ComputeManagementClient
from chaosazure.actions.vm import OperationPlan
from chaosazure.auth import TokenCredentials, acquire_token
from chaosazure.common import (
    ApiError,
    AuthError,
    ConfigError,
    DEFAULT_CHAOS_OPERATION_TIMEOUT,
    DEFAULT_CHAOS_TOKEN_TYPE
)
from chaosazure.helpers import bounded
from chaosazure.probes.vm import list_vms
from chaosazure.selection import compile_match, select_resource
from collections import namedtuple
from logzero import logger

RunConfig = namedtuple('RunConfig', [
    'tenant', 'subscription', 'client', 'password', 'resource_group',
    'resource', 'random_resource', 'operation', 'resource_match', 'delay'
])
RunConfig.__new__.__defaults__ = (None, False, None, None, None)


def validate_config(config: RunConfig) -> RunConfig:
    """
    Check the invariants between the resource options of a RunConfig.

    Exactly one of resource/random_resource must be given, and a resource
    match pattern only makes sense when choosing a resource at random. The
    match pattern must be a valid regular expression.
    """
    if not config.random_resource and not config.resource:
        raise ConfigError("Either a resource is required or select one at "
                          "random.")
    if config.random_resource and config.resource:
        raise ConfigError("Can not choose a random resource and specify an "
                          "actual resource.")
    if config.resource and config.resource_match:
        raise ConfigError("Can not specify a resource match pattern when "
                          "specifying a specific resource.")
    if config.resource_match is not None:
        compile_match(config.resource_match)
    return config


PipelineContext = namedtuple('PipelineContext', [
    'token_type', 'access_token', 'credentials', 'client', 'resource'
])
PipelineContext.__new__.__defaults__ = (None,) * len(PipelineContext._fields)


class OperationPipeline(object):
    """
    Authenticate, resolve the target VM and perform the operation on it.

    Steps run strictly in order. Each step takes the PipelineContext built so
    far and returns an updated copy. The first error aborts the run; nothing
    is retried or rolled back.
    """

    def __init__(self, config: RunConfig, plan: OperationPlan,
                 timeout: int = DEFAULT_CHAOS_OPERATION_TIMEOUT,
                 credential_class=ClientSecretCredential,
                 client_class=ComputeManagementClient,
                 sleep=asyncio.sleep, rng=random):
        self.config = validate_config(config)
        self.plan = plan
        self.timeout = timeout
        self.credential_class = credential_class
        self.client_class = client_class
        self.sleep = sleep
        self.rng = rng

    def steps(self):
        steps = [
            self.authenticate,
            self.gather_credentials,
            self.generate_client,
            self.determine_resource,
            self.perform_begin_operation
        ]
        # Compound operations (powercycle) wait, then finish
        if self.plan.end:
            steps.append(self.pause_between_operations)
            steps.append(self.perform_end_operation)
        return steps

    async def execute(self) -> PipelineContext:
        context = PipelineContext()
        try:
            for step in self.steps():
                context = await step(context)
        finally:
            if context.client is not None:
                await self.close_client(context.client)
        return context

    async def close_client(self, client) -> bool:
        # A failed close must not mask the error that aborted the run
        try:
            await client.close()
        except Exception as e:
            logger.error("Failed to close the compute management client")
            logger.exception(e)
            return False
        return True

    async def authenticate(self, context: PipelineContext) -> PipelineContext:
        logger.info("Acquiring token.")
        try:
            token = await bounded(
                acquire_token(self.config.tenant, self.config.client,
                              self.config.password,
                              credential_class=self.credential_class),
                self.timeout, "Token acquisition")
        except asyncio.TimeoutError as e:
            raise AuthError("Timed out acquiring a token after {} "
                            "seconds.".format(self.timeout)) from e
        except (AzureError, ValueError) as e:
            logger.exception(e)
            raise AuthError("Failed to acquire a token for client {} in "
                            "tenant {}: {}".format(self.config.client,
                                                   self.config.tenant,
                                                   e)) from e
        return context._replace(token_type=DEFAULT_CHAOS_TOKEN_TYPE,
                                access_token=token)

    async def gather_credentials(self,
                                 context: PipelineContext) -> PipelineContext:
        logger.info("Gathering credentials.")
        credentials = TokenCredentials(self.config.subscription,
                                       context.access_token,
                                       token_type=context.token_type)
        return context._replace(credentials=credentials)

    async def generate_client(self,
                              context: PipelineContext) -> PipelineContext:
        logger.info("Generate client.")
        client = self.client_class(context.credentials,
                                   self.config.subscription)
        return context._replace(client=client)

    async def determine_resource(self,
                                 context: PipelineContext) -> PipelineContext:
        if self.config.random_resource:
            try:
                vms = await bounded(
                    list_vms(context.client, self.config.resource_group),
                    self.timeout, "Listing VMs")
            except asyncio.TimeoutError as e:
                raise ApiError("Timed out listing VMs in resource group {} "
                               "after {} seconds.".format(
                                   self.config.resource_group,
                                   self.timeout)) from e
            except AzureError as e:
                logger.exception(e)
                raise ApiError("Failed to list VMs in resource group {}: "
                               "{}".format(self.config.resource_group,
                                           e)) from e
            resource = select_resource(vms, self.config.resource_match,
                                       rng=self.rng)
        else:
            resource = self.config.resource
        logger.info("Resource to perform operation on: %s", resource)
        return context._replace(resource=resource)

    async def _perform(self, function, context: PipelineContext) -> None:
        try:
            await bounded(function(context.client, self.config.resource_group,
                                   context.resource),
                          self.timeout, function.__name__)
        except asyncio.TimeoutError as e:
            raise ApiError("{} on {} timed out after {} seconds.".format(
                function.__name__, context.resource, self.timeout)) from e
        except AzureError as e:
            logger.exception(e)
            raise ApiError("{} on {} failed: {}".format(
                function.__name__, context.resource, e)) from e

    async def perform_begin_operation(
            self, context: PipelineContext) -> PipelineContext:
        logger.info("Start operation: %s", self.config.operation)
        await self._perform(self.plan.begin, context)
        logger.info("Operation %s succeeded.", self.config.operation)
        return context

    async def pause_between_operations(
            self, context: PipelineContext) -> PipelineContext:
        logger.info("Pausing for %d seconds.", self.plan.delay)
        await self.sleep(self.plan.delay)
        return context

    async def perform_end_operation(
            self, context: PipelineContext) -> PipelineContext:
        logger.info("Finishing operation: %s", self.config.operation)
        try:
            await self._perform(self.plan.end, context)
        except ApiError:
            logger.error("Finishing operation %s failed. %s was left in the "
                         "state the first half of the operation put it in.",
                         self.config.operation, context.resource)
            raise
        logger.info("Finishing operation %s succeeded.", self.config.operation)
        return context
