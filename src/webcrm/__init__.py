"""Python client for the WebCRM REST API.

    import webcrm

    client = webcrm.configure(tenant="my_tenant", login="me", api_key="secret")
    contact = webcrm.Contact.find(client, "e70a7123f499c5e0e9972ab4dbfb8fe3")
    for item in client.search(query="johnson", limit=20):
        print(item)
"""

from webcrm.client import CrmClient, configure, from_configuration
from webcrm.config import Configuration, ConfigurationError
from webcrm.core import ItemEnumerator, SearchConfigurator
from webcrm.errors import (
    AuthenticationFailed,
    ClientError,
    CrmError,
    ForbiddenAccess,
    InvalidKeys,
    InvalidValues,
    ItemStatePreconditionFailed,
    NetworkError,
    RateLimitExceeded,
    ResourceConflict,
    ResourceNotFound,
    ServerError,
    TooManyParams,
    UnauthorizedAccess,
)
from webcrm.resources import (
    Account,
    Activity,
    Collection,
    Contact,
    Event,
    EventContact,
    Mailing,
    MailingDelivery,
    MailingRecipient,
    TemplateSet,
    Type,
)
from webcrm.versioning import PACKAGE_VERSION

__version__ = PACKAGE_VERSION

__all__ = [
    # Client
    "CrmClient",
    "configure",
    "from_configuration",
    "Configuration",
    "ConfigurationError",
    "ItemEnumerator",
    "SearchConfigurator",
    # Resources
    "Account",
    "Activity",
    "Collection",
    "Contact",
    "Event",
    "EventContact",
    "Mailing",
    "MailingDelivery",
    "MailingRecipient",
    "TemplateSet",
    "Type",
    # Errors
    "CrmError",
    "NetworkError",
    "ServerError",
    "ClientError",
    "UnauthorizedAccess",
    "AuthenticationFailed",
    "ForbiddenAccess",
    "ResourceNotFound",
    "ItemStatePreconditionFailed",
    "ResourceConflict",
    "InvalidKeys",
    "InvalidValues",
    "RateLimitExceeded",
    "TooManyParams",
]
