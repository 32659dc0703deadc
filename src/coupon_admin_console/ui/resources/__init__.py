from .paginated_resource import EditorDialog, ResourceEndpoint, ResourceListPage
from .pagination import ALL_FILTER, PAGE_SIZE_OPTIONS, PaginationState

__all__ = ["ALL_FILTER", "EditorDialog", "PAGE_SIZE_OPTIONS", "PaginationState", "ResourceEndpoint", "ResourceListPage"]
