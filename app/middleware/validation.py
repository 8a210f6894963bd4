"""
Request validation middleware.
Assigns request IDs, logs requests, enforces body size, JSON content type and per-IP rate limits.
"""

from typing import Callable, Dict, Any
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from app.services.error_handler import ErrorHandlerService
from app.utils.exceptions import APIException, BadRequestError, RateLimitExceededError

logger = logging.getLogger(__name__)


class ValidationMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request preprocessing.
    Handles request size and content-type checks, rate limiting, and request logging.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 1024 * 1024,  # 1MB
        enable_request_logging: bool = True,
        enable_rate_limiting: bool = False,
        rate_limit_requests: int = 150,
        rate_limit_window: int = 15 * 60
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.enable_request_logging = enable_request_logging
        self.enable_rate_limiting = enable_rate_limiting
        self.rate_limit_requests = rate_limit_requests
        self.rate_limit_window = rate_limit_window
        self.request_counts: Dict[str, Dict[str, Any]] = {}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through validation middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object
        """
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            self._validate_request_size(request)

            if self.enable_rate_limiting:
                self._apply_rate_limiting(request)

            self._validate_content_type(request)
        except APIException as exc:
            response = ErrorHandlerService.handle_api_exception(exc, request)
            response.headers["X-Request-ID"] = request_id
            return response

        if self.enable_request_logging:
            self._log_request(request, request_id)

        response = await call_next(request)

        if self.enable_request_logging:
            processing_time = time.time() - start_time
            self._log_response(request, response, request_id, processing_time)

        response.headers["X-Request-ID"] = request_id
        return response

    def _validate_request_size(self, request: Request) -> None:
        """
        Validate request content length.

        Raises:
            BadRequestError: If request size exceeds limit
        """
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                raise BadRequestError("Invalid content-length header")
            if size > self.max_request_size:
                raise BadRequestError(
                    f"Request size {size} bytes exceeds maximum allowed size {self.max_request_size} bytes"
                )

    def _apply_rate_limiting(self, request: Request) -> None:
        """
        Apply fixed-window rate limiting based on client IP.

        Raises:
            RateLimitExceededError: If rate limit is exceeded
        """
        client_ip = self._get_client_ip(request)
        current_time = time.time()

        self._clean_rate_limit_data(current_time)

        client_data = self.request_counts.setdefault(
            client_ip, {"count": 0, "window_start": current_time}
        )

        # Reset window if expired
        if current_time - client_data["window_start"] > self.rate_limit_window:
            client_data["count"] = 0
            client_data["window_start"] = current_time

        if client_data["count"] >= self.rate_limit_requests:
            retry_after = int(self.rate_limit_window - (current_time - client_data["window_start"]))
            raise RateLimitExceededError(max(retry_after, 1))

        client_data["count"] += 1

    def _validate_content_type(self, request: Request) -> None:
        """
        Require JSON bodies on POST/PUT requests.

        Raises:
            BadRequestError: If a body is sent with another content type
        """
        if request.method not in ("POST", "PUT"):
            return

        content_type = request.headers.get("content-type", "")
        if content_type and not content_type.startswith("application/json"):
            raise BadRequestError(
                f"Unsupported content type '{content_type}'. Expected 'application/json'"
            )

    def _get_client_ip(self, request: Request) -> str:
        """
        Get client IP address from request.

        Args:
            request: FastAPI request object

        Returns:
            Client IP address
        """
        # Check for forwarded headers (load balancer/proxy)
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"

    def _clean_rate_limit_data(self, current_time: float) -> None:
        """Drop rate limit windows that expired long ago."""
        expired_clients = [
            client_ip
            for client_ip, data in self.request_counts.items()
            if current_time - data["window_start"] > self.rate_limit_window * 2
        ]

        for client_ip in expired_clients:
            del self.request_counts[client_ip]

    def _log_request(self, request: Request, request_id: str) -> None:
        logger.info(
            f"Request [{request_id}]: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query_params": str(request.query_params),
                "client_ip": self._get_client_ip(request),
                "user_agent": request.headers.get("user-agent", "unknown")
            }
        )

    def _log_response(
        self,
        request: Request,
        response: Response,
        request_id: str,
        processing_time: float
    ) -> None:
        logger.info(
            f"Response [{request_id}]: {response.status_code} - {processing_time:.3f}s",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "processing_time": processing_time,
                "path": request.url.path,
                "method": request.method
            }
        )
