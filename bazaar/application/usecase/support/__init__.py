"""Support desk use cases."""

from .delete_query import DeleteQueryRequest, DeleteQueryResponse, DeleteQueryUseCase
from .get_query import GetQueryRequest, GetQueryUseCase
from .list_queries import ListQueriesRequest, ListQueriesResponse, ListQueriesUseCase
from .query_stats import QueryStatsRequest, QueryStatsResponse, QueryStatsUseCase
from .rate_query import RateQueryRequest, RateQueryUseCase
from .respond_to_query import RespondToQueryRequest, RespondToQueryUseCase
from .submit_query import SubmitQueryRequest, SubmitQueryUseCase
from .update_query_status import UpdateQueryStatusRequest, UpdateQueryStatusUseCase
from .views import SupportQueryItem

__all__ = [
    "DeleteQueryRequest",
    "DeleteQueryResponse",
    "DeleteQueryUseCase",
    "GetQueryRequest",
    "GetQueryUseCase",
    "ListQueriesRequest",
    "ListQueriesResponse",
    "ListQueriesUseCase",
    "QueryStatsRequest",
    "QueryStatsResponse",
    "QueryStatsUseCase",
    "RateQueryRequest",
    "RateQueryUseCase",
    "RespondToQueryRequest",
    "RespondToQueryUseCase",
    "SubmitQueryRequest",
    "SubmitQueryUseCase",
    "SupportQueryItem",
    "UpdateQueryStatusRequest",
    "UpdateQueryStatusUseCase",
]
