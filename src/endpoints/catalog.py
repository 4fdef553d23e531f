"""Static endpoint case tables for the itinerary and web targets."""

from .models import EndpointCase

PREDEFINED_ITINERARY = "40a4a646-9ede-4660-9f0d-bd1d2190a845"
PREDEFINED_MEDIA = "40a4a646-9ede-4660-9f0d-bd1d2190a901"
MISSING_ID = "00000000-0000-0000-0000-000000000000"
STALE_MEDIA_ID = "123e4567-e89b-12d3-a456-426614174000"

_ITINERARY_BODY = {
    "city": "Test City",
    "startDate": "2025-04-01",
    "endDate": "2025-04-03",
    "days": [{"day": 1, "items": ["Test activity 1", "Test activity 2"]}],
}
_UPDATED_ITINERARY_BODY = {
    "city": "Updated City",
    "startDate": "2025-04-01",
    "endDate": "2025-04-03",
    "days": [{"day": 1, "items": ["Updated activity"]}],
}

ITINERARY_CASES: tuple[EndpointCase, ...] = (
    # Itinerary CRUD
    EndpointCase("GET", "/api/itineraries", "List all itineraries", 200, "Itineraries"),
    EndpointCase("GET", "/api/itineraries?city=Casablanca", "Search itineraries by city", 200, "Itineraries"),
    EndpointCase(
        "GET",
        "/api/itineraries?from=2024-01-01&to=2024-12-31",
        "Search itineraries by date range",
        200,
        "Itineraries",
    ),
    EndpointCase("GET", "/api/itineraries?page=0&size=10", "List itineraries with pagination", 200, "Itineraries"),
    EndpointCase("POST", "/api/itineraries", "Create new itinerary", 201, "Itineraries", body=_ITINERARY_BODY),
    EndpointCase("GET", "/api/itineraries/{id}", "Get specific itinerary", 200, "Itineraries"),
    EndpointCase(
        "PUT", "/api/itineraries/{id}", "Update specific itinerary", 200, "Itineraries", body=_UPDATED_ITINERARY_BODY
    ),
    EndpointCase("DELETE", "/api/itineraries/{id}", "Delete specific itinerary", 204, "Itineraries"),
    EndpointCase(
        "POST",
        "/api/itineraries/{id}/days/1/items",
        "Add item to day 1",
        200,
        "Itineraries",
        body={"value": "New activity item"},
    ),
    EndpointCase("DELETE", "/api/itineraries/{id}/days/1/items/0", "Remove item from day 1", 200, "Itineraries"),
    # Predefined fixture itinerary
    EndpointCase("GET", f"/api/itineraries/{PREDEFINED_ITINERARY}", "Get predefined test itinerary", 200, "Itineraries"),
    EndpointCase(
        "PUT",
        f"/api/itineraries/{PREDEFINED_ITINERARY}",
        "Update predefined test itinerary",
        200,
        "Itineraries",
        body={"city": "Updated Test City"},
    ),
    EndpointCase(
        "GET", f"/api/v1/itineraries/{PREDEFINED_ITINERARY}/media", "Get media for predefined itinerary", 200, "Media"
    ),
    EndpointCase(
        "GET",
        f"/api/v1/itineraries/{PREDEFINED_ITINERARY}/media/{PREDEFINED_MEDIA}",
        "Get specific predefined media",
        200,
        "Media",
    ),
    EndpointCase(
        "POST", f"/api/v1/itineraries/{PREDEFINED_ITINERARY}/media", "Upload test image", 201, "Media", upload=True
    ),
    # Itinerary error cases
    EndpointCase("GET", f"/api/itineraries/{MISSING_ID}", "Get non-existent itinerary", 404, "Itineraries"),
    EndpointCase(
        "PUT",
        f"/api/itineraries/{MISSING_ID}",
        "Update non-existent itinerary",
        404,
        "Itineraries",
        body={"city": "Updated City"},
    ),
    EndpointCase("DELETE", f"/api/itineraries/{MISSING_ID}", "Delete non-existent itinerary", 404, "Itineraries"),
    EndpointCase(
        "POST",
        f"/api/itineraries/{MISSING_ID}/days/1/items",
        "Add item to non-existent itinerary",
        404,
        "Itineraries",
        body={"value": "Test item"},
    ),
    EndpointCase(
        "DELETE",
        f"/api/itineraries/{MISSING_ID}/days/1/items/0",
        "Remove item from non-existent itinerary",
        404,
        "Itineraries",
    ),
    EndpointCase("POST", "/api/itineraries", "Create invalid itinerary", 400, "Itineraries", body={"invalid": "data"}),
    EndpointCase("GET", "/api/itineraries?page=-1&size=0", "Invalid pagination", 400, "Itineraries"),
    # Media
    EndpointCase("POST", "/api/v1/itineraries/{id}/media", "Upload media file", 201, "Media", upload=True),
    EndpointCase("GET", "/api/v1/itineraries/{id}/media", "Get all media", 200, "Media"),
    EndpointCase("GET", "/api/v1/itineraries/{id}/media/active", "Get active media", 200, "Media"),
    EndpointCase("GET", "/api/v1/itineraries/{id}/media/paged?page=0&size=10", "Get media with pagination", 200, "Media"),
    EndpointCase("GET", "/api/v1/itineraries/{id}/media/{mediaId}", "Get specific media", 200, "Media"),
    EndpointCase(
        "POST", "/api/v1/itineraries/{id}/media/{mediaId}/sas?expirationMinutes=60", "Generate SAS URL", 200, "Media"
    ),
    EndpointCase("DELETE", "/api/v1/itineraries/{id}/media/{mediaId}", "Delete specific media", 204, "Media"),
    EndpointCase("DELETE", "/api/v1/itineraries/{id}/media", "Delete all media", 204, "Media"),
    # Media error cases
    EndpointCase("GET", f"/api/v1/itineraries/{MISSING_ID}/media", "Get media for non-existent itinerary", 404, "Media"),
    EndpointCase(
        "GET",
        f"/api/v1/itineraries/{MISSING_ID}/media/active",
        "Get active media for non-existent itinerary",
        404,
        "Media",
    ),
    EndpointCase(
        "GET",
        f"/api/v1/itineraries/{MISSING_ID}/media/paged?page=0&size=10",
        "Get paginated media for non-existent itinerary",
        404,
        "Media",
    ),
    EndpointCase(
        "GET", f"/api/v1/itineraries/{MISSING_ID}/media/{STALE_MEDIA_ID}", "Get non-existent media", 404, "Media"
    ),
    EndpointCase(
        "POST",
        f"/api/v1/itineraries/{MISSING_ID}/media/{STALE_MEDIA_ID}/sas?expirationMinutes=60",
        "Generate SAS for non-existent media",
        404,
        "Media",
    ),
    EndpointCase(
        "DELETE", f"/api/v1/itineraries/{MISSING_ID}/media/{STALE_MEDIA_ID}", "Delete non-existent media", 404, "Media"
    ),
    EndpointCase(
        "DELETE", f"/api/v1/itineraries/{MISSING_ID}/media", "Delete all media for non-existent itinerary", 404, "Media"
    ),
    EndpointCase("POST", "/api/v1/itineraries/{id}/media", "Upload media without file", 400, "Media"),
    EndpointCase(
        "POST",
        "/api/v1/itineraries/{id}/media/{mediaId}/sas?expirationMinutes=0",
        "Generate SAS with invalid expiration",
        400,
        "Media",
    ),
    EndpointCase(
        "POST",
        "/api/v1/itineraries/{id}/media/{mediaId}/sas?expirationMinutes=2000",
        "Generate SAS with too long expiration",
        400,
        "Media",
    ),
    # Actuator
    EndpointCase("GET", "/actuator", "Actuator root", 200, "Actuator"),
    EndpointCase("GET", "/actuator/health", "Application health status", 200, "Actuator"),
    EndpointCase("GET", "/actuator/health/db", "Database health status", 200, "Actuator"),
    EndpointCase("GET", "/actuator/health/redis", "Redis health status", 200, "Actuator"),
    EndpointCase("GET", "/actuator/info", "Application information", 200, "Actuator"),
    EndpointCase("GET", "/actuator/metrics", "List available metrics", 200, "Actuator"),
    EndpointCase("GET", "/actuator/metrics/jvm.memory.used", "Get specific metric", 200, "Actuator"),
    EndpointCase("GET", "/actuator/health/invalid-component", "Invalid health component", 404, "Actuator"),
    EndpointCase("GET", "/actuator/metrics/non.existent.metric", "Non-existent metric", 404, "Actuator"),
    EndpointCase("GET", "/actuator/invalid-endpoint", "Invalid actuator endpoint", 404, "Actuator"),
    # Swagger / OpenAPI
    EndpointCase("GET", "/swagger-ui.html", "Swagger UI interface", 200, "Swagger"),
    EndpointCase("GET", "/v3/api-docs", "OpenAPI documentation JSON", 200, "Swagger"),
    EndpointCase("GET", "/swagger-ui/index.html", "Swagger UI index", 200, "Swagger"),
    EndpointCase("GET", "/swagger-ui/invalid-path", "Invalid Swagger path", 404, "Swagger"),
    EndpointCase("GET", "/v3/api-docs/invalid-path", "Invalid OpenAPI path", 404, "Swagger"),
    EndpointCase("POST", "/swagger-ui.html", "Invalid method on Swagger UI", 405, "Swagger"),
)

WEB_CASES: tuple[EndpointCase, ...] = (
    EndpointCase(
        "POST",
        "/api/auth/login",
        "Login user",
        200,
        "Auth",
        body={"email": "test@musafirgo.com", "password": "password"},
    ),
    EndpointCase(
        "POST",
        "/api/auth/register",
        "Register user",
        201,
        "Auth",
        body={"email": "newuser@test.com", "password": "password", "name": "New User"},
    ),
    EndpointCase("GET", "/api/auth/me", "Get current user", 200, "Auth"),
    EndpointCase("GET", "/api/destinations", "List all destinations", 200, "Destinations"),
    EndpointCase("GET", "/api/destinations?search=Istanbul", "Search destinations", 200, "Destinations"),
    EndpointCase("GET", "/api/destinations?country=Turquie", "Filter by country", 200, "Destinations"),
    EndpointCase("GET", "/api/destinations?halalFriendly=true", "Filter halal friendly", 200, "Destinations"),
    EndpointCase("GET", "/api/destinations/1", "Get specific destination", 200, "Destinations"),
    EndpointCase("GET", "/api/accommodations", "List all accommodations", 200, "Accommodations"),
    EndpointCase("GET", "/api/accommodations?search=Hotel", "Search accommodations", 200, "Accommodations"),
    EndpointCase("GET", "/api/accommodations?location=Istanbul", "Filter by location", 200, "Accommodations"),
    EndpointCase("GET", "/api/accommodations?minPrice=50&maxPrice=200", "Filter by price range", 200, "Accommodations"),
    EndpointCase("GET", "/api/accommodations?halalCertified=true", "Filter halal certified", 200, "Accommodations"),
    EndpointCase("GET", "/api/accommodations/1", "Get specific accommodation", 200, "Accommodations"),
    EndpointCase("GET", "/api/destinations/999", "Get non-existent destination", 404, "Destinations"),
    EndpointCase("GET", "/api/accommodations/999", "Get non-existent accommodation", 404, "Accommodations"),
    EndpointCase(
        "POST",
        "/api/auth/login",
        "Invalid login",
        401,
        "Auth",
        body={"email": "invalid@test.com", "password": "wrong"},
    ),
    EndpointCase(
        "POST",
        "/api/auth/register",
        "Invalid registration",
        400,
        "Auth",
        body={"email": "test@musafirgo.com", "password": "123"},
    ),
)


def endpoint_catalog(cases: tuple[EndpointCase, ...]) -> list[tuple[str, str]]:
    """List distinct ``(METHOD path, description)`` pairs in table order.

    Error-case rows are left out so the catalog documents the API surface
    rather than the negative tests.
    """
    seen: set[str] = set()
    catalog = []
    for case in cases:
        if case.expected_status >= 400:
            continue
        key = f"{case.method} {case.path}"
        if key in seen:
            continue
        seen.add(key)
        catalog.append((key, case.description))
    return catalog
