from __future__ import annotations

from rest_framework.pagination import PageNumberPagination

from vx_core.common.api.responses import success


class DefaultPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 200

    def get_paginated_response(self, data):
        page = self.page
        return success(
            {
                "results": data,
                "pagination": {
                    "page": page.number,
                    "limit": page.paginator.per_page,
                    "total": page.paginator.count,
                    "total_pages": page.paginator.num_pages,
                },
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "data": {
                    "type": "object",
                    "properties": {
                        "results": schema,
                        "pagination": {
                            "type": "object",
                            "properties": {
                                "page": {"type": "integer"},
                                "limit": {"type": "integer"},
                                "total": {"type": "integer"},
                                "total_pages": {"type": "integer"},
                            },
                        },
                    },
                },
            },
        }


def paginate(request, queryset, serializer_class, *, paginator: PageNumberPagination | None = None):
    """
    Shared pagination helper to enforce a stable contract:
      {success, data: {results, pagination: {page, limit, total, total_pages}}}
    """
    p = paginator or DefaultPagination()
    page = p.paginate_queryset(queryset, request)
    if page is not None:
        ser = serializer_class(page, many=True)
        return p.get_paginated_response(ser.data)

    ser = serializer_class(queryset, many=True)
    return success({"results": ser.data})
