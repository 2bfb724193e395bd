import logging

from fastapi.responses import FileResponse, JSONResponse

from ebook_payments.errors import TransferError

logger = logging.getLogger(__name__)


class EbookFileResponse(FileResponse):
    """FileResponse that turns I/O failures into TransferError handling.

    If nothing reached the client yet, a 500 is sent instead. Once the
    response start went out the status can no longer change, so the transfer
    is logged and abandoned.
    """

    async def __call__(self, scope, receive, send):
        started = False

        async def tracking_send(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await super().__call__(scope, receive, tracking_send)
        except (OSError, RuntimeError) as e:
            if started:
                logger.warning("Transfer of %s aborted mid-stream: %s", self.filename, e)
                return

            logger.error("Error downloading file %s: %s", self.path, e)
            error = TransferError()
            response = JSONResponse({"detail": error.detail}, status_code=error.status_code)
            await response(scope, receive, send)
