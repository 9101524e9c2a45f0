import logging
from typing import Tuple
from urllib.parse import urlsplit

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse
from starlette.types import Receive, Scope, Send
import uvicorn
from urllib3 import HTTPHeaderDict

from .dispatch import RequestDispatcher
from .model import Request, Response
from .util import end_to_end_headers


logger = logging.getLogger(__name__)


def target_path(scope: Scope) -> str:
    """
    The path and query string a client asked for.

    Requests in absolute form ("GET http://host/a HTTP/1.1") are reduced to their path; everything goes to the
    configured origin.
    """
    path = scope.get('path') or '/'
    parts = urlsplit(path)
    if parts.scheme:
        path = parts.path or '/'
    query = scope.get('query_string', b'')
    if query:
        path += '?' + query.decode('latin-1')
    return path


class ProxyApp:
    """
    An ASGI application that answers every request, whatever its method or path, through a dispatcher.

    The dispatcher blocks on the origin, so it runs in the threadpool.
    """

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self.dispatcher = dispatcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope['type'] == 'lifespan':
            await self._lifespan(receive, send)
            return
        if scope['type'] != 'http':
            return

        client_request = StarletteRequest(scope, receive)
        headers = HTTPHeaderDict()
        for name, value in client_request.headers.items():
            headers.add(name, value)
        # The whole body is read before the request is keyed.
        body = await client_request.body()

        request = Request(method=client_request.method, path=target_path(scope), headers=headers, body=body)
        try:
            response = await run_in_threadpool(self.dispatcher.handle, request)
        except Exception:
            logger.exception('Unexpected error while handling {} {}'.format(request.method, request.path))
            response = Response(status=500)

        await self._to_asgi(request, response)(scope, receive, send)

    @staticmethod
    def _to_asgi(request: Request, response: Response) -> StarletteResponse:
        bodiless = request.method == 'HEAD' or response.status < 200 or response.status in (204, 304)
        if bodiless:
            headers = end_to_end_headers(response.headers)
            body = b''
        else:
            headers = end_to_end_headers(response.headers, exclude=('Content-Length',))
            headers['Content-Length'] = str(len(response.body))
            body = response.body

        result = StarletteResponse(content=body, status_code=response.status)
        # Repeated headers such as Set-Cookie are written one line each.
        result.raw_headers = [(name.lower().encode('latin-1'), value.encode('latin-1'))
                              for name, value in headers.iteritems()]
        return result

    @staticmethod
    async def _lifespan(receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message['type'] == 'lifespan.startup':
                await send({'type': 'lifespan.startup.complete'})
            elif message['type'] == 'lifespan.shutdown':
                await send({'type': 'lifespan.shutdown.complete'})
                return


def create_server(address: Tuple[str, int], dispatcher: RequestDispatcher) -> uvicorn.Server:
    host, port = address
    config = uvicorn.Config(
        ProxyApp(dispatcher),
        host=host,
        port=port,
        log_config=None,
        server_header=False,
        date_header=False,
    )
    return uvicorn.Server(config)
