from azure.core.credentials import AccessToken
from azure.identity.aio import ClientSecretCredential
from chaosazure.common import (
    DEFAULT_CHAOS_ARM_SCOPE,
    DEFAULT_CHAOS_TOKEN_TYPE
)
from logzero import logger


async def acquire_token(tenant: str, client: str, password: str,
                        scope: str = DEFAULT_CHAOS_ARM_SCOPE,
                        credential_class=ClientSecretCredential) -> AccessToken:
    """
    Exchange a service principal's client id and secret for an access token
    (OAuth2 client-credentials grant).

    Errors raised by the identity library are not caught here.

    :param tenant: Directory (tenant) id. Required.
    :type tenant: str
    :param client: Service principal client id. Required.
    :type client: str
    :param password: Service principal secret. Required.
    :type password: str
    :param scope: The audience the token is requested for.
        Optional. (Default: chaosazure.common.DEFAULT_CHAOS_ARM_SCOPE)
    :type scope: str
    :param credential_class: Async credential type to authenticate with.
        Optional. (Default: azure.identity.aio.ClientSecretCredential)
    :return: azure.core.credentials.AccessToken
    """
    logger.debug("Requesting token for client %s in tenant %s with scope %s",
                 client, tenant, scope)
    async with credential_class(tenant, client, password) as credential:
        return await credential.get_token(scope)


class TokenCredentials(object):
    """
    An async token credential that hands out an already acquired token.

    Satisfies the azure-core AsyncTokenCredential protocol, so it can be given
    to any async management client. The token is never refreshed; a chaos run
    is expected to finish well inside the token's lifetime.
    """

    def __init__(self, subscription_id: str, access_token: AccessToken,
                 token_type: str = DEFAULT_CHAOS_TOKEN_TYPE):
        self.subscription_id = subscription_id
        self.access_token = access_token
        self.token_type = token_type

    async def get_token(self, *scopes, **kwargs) -> AccessToken:
        return self.access_token

    async def close(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    def __repr__(self):
        return "TokenCredentials(subscription_id={!r}, token_type={!r})".format(
            self.subscription_id, self.token_type)
