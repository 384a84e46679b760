"""Closed vocabularies for services, log levels, and generated messages."""

SERVICES = ("user-service", "auth-service", "payment-service", "order-service")

LOG_LEVELS = ("info", "warn", "error", "debug")

RANDOM_MESSAGES = (
    "User login successful",
    "Failed to process payment",
    "New order created",
    "Database connection timeout",
    "Cache miss for key",
    "Rate limit exceeded",
    "API request completed",
    "Session expired",
    "Invalid credentials provided",
    "Resource not found",
)


def is_known_service(name: str) -> bool:
    return name in SERVICES


def is_known_level(name: str) -> bool:
    return name in LOG_LEVELS
