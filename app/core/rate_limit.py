"""
Simple in-memory rate limiter for the authentication endpoints.
"""
import logging
import time
from collections import defaultdict
from typing import Dict, List
from fastapi import Request, HTTPException, status

from app.core.config import AUTH_RATE_LIMIT, AUTH_RATE_WINDOW_SECONDS

logger = logging.getLogger(__name__)

# {ip: [request timestamps inside the current window]}
rate_limit_store: Dict[str, List[float]] = defaultdict(list)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()
    
    if request.client:
        return request.client.host
    
    return "unknown"


def check_rate_limit(request: Request, max_requests: int = 10, window_seconds: int = 60) -> None:
    """
    Check if client has exceeded rate limit.
    
    Args:
        request: FastAPI request object
        max_requests: Maximum number of requests allowed
        window_seconds: Time window in seconds
        
    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    ip = get_client_ip(request)
    now = time.time()
    
    cutoff = now - window_seconds
    rate_limit_store[ip] = [
        timestamp for timestamp in rate_limit_store[ip]
        if timestamp > cutoff
    ]
    
    request_count = len(rate_limit_store[ip])
    
    if request_count >= max_requests:
        logger.warning(f"Rate limit exceeded for IP: {ip} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )
    
    rate_limit_store[ip].append(now)


def auth_rate_limit(request: Request) -> None:
    """Dependency applying the configured limit to login and registration."""
    check_rate_limit(request, max_requests=AUTH_RATE_LIMIT, window_seconds=AUTH_RATE_WINDOW_SECONDS)
