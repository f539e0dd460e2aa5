"""API layer for the three CBC backend generations."""

from ..utils.http_client import HttpClient
from ..utils.identifiers import ApiGeneration
from .base import ApiClient
from .bistro_api import BistroAPI
from .catalog_api import CatalogAPI
from .graphql_api import GraphQLAPI
from .manifest_api import ManifestAPI

CLIENTS = {
    ApiGeneration.BISTRO: BistroAPI,
    ApiGeneration.CATALOG: CatalogAPI,
    ApiGeneration.GRAPHQL: GraphQLAPI,
}


def build_client(generation: str, http_client: HttpClient) -> ApiClient:
    """Returns the client for ``generation`` (``bistro``, ``catalog`` or ``graphql``)."""

    return CLIENTS[ApiGeneration(generation)](http_client)


__all__ = ["ApiClient", "BistroAPI", "CatalogAPI", "GraphQLAPI", "ManifestAPI", "build_client"]
