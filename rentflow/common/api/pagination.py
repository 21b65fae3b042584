# backend/rentflow/common/api/pagination.py
from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class DefaultPagination(PageNumberPagination):
    """
    ?page=<n>&limit=<size>; 50 rows per page unless the client asks for fewer.
    """
    page_size = 50
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response(
            {
                "count": self.page.paginator.count,
                "page": self.page.number,
                "pages": self.page.paginator.num_pages,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )


def paginate(request, queryset, serializer_class, *, paginator: PageNumberPagination | None = None) -> Response:
    """
    List endpoints answer {count, page, pages, next, previous, results}.
    """
    p = paginator or DefaultPagination()
    page = p.paginate_queryset(queryset, request)
    if page is None:
        return Response(serializer_class(queryset, many=True).data)
    return p.get_paginated_response(serializer_class(page, many=True).data)
