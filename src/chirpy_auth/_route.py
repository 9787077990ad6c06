from collections.abc import Awaitable, Callable
from typing import Any

from cross_web import AsyncHTTPRequest, Response
from pydantic import BaseModel

from ._context import Context


class Route:
    def __init__(
        self,
        path: str,
        methods: list[str],
        function: Callable[[AsyncHTTPRequest, Context], Awaitable[Response]],
        response_model: type[BaseModel] | None = None,
        operation_id: str | None = None,
        summary: str | None = None,
    ):
        self.path = path
        self.methods = methods
        self.function = function
        self.response_model = response_model
        self.operation_id = operation_id
        self.summary = summary

    def to_fastapi_endpoint(self, context: Context) -> Callable[..., Any]:
        from fastapi import Request as FastAPIRequest
        from fastapi import Response as FastAPIResponse

        async def wrapper(request: FastAPIRequest) -> FastAPIResponse:
            route_request = AsyncHTTPRequest.from_fastapi(request)

            route_response = await self.function(route_request, context)

            return route_response.to_fastapi()

        return wrapper
