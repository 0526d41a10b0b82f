from rest_framework.pagination import PageNumberPagination


class DefaultPagination(PageNumberPagination):
    """Project-wide pagination with an adjustable page size via query param."""

    page_size_query_param = "page_size"
    max_page_size = 100
