"""Latency sampling plans for the itinerary and web targets."""

from .models import SamplePlan

MISSING_ID = "00000000-0000-0000-0000-000000000000"

PERFORMANCE_ITINERARY_BODY = {
    "city": "Performance Test City",
    "startDate": "2025-04-01",
    "endDate": "2025-04-03",
    "days": [{"day": 1, "items": ["Performance test activity"]}],
}

THROWAWAY_ITINERARY_BODY = {
    "city": "Performance Test City",
    "startDate": "2025-04-01",
    "endDate": "2025-04-03",
    "days": [{"day": 1, "items": ["Test activity"]}],
}

ITINERARY_PLAN: tuple[SamplePlan, ...] = (
    SamplePlan("Health Check", "GET", "/actuator/health"),
    SamplePlan("List Itineraries", "GET", "/api/itineraries"),
    SamplePlan("Search by City", "GET", "/api/itineraries?city=Casablanca"),
    SamplePlan("Actuator Info", "GET", "/actuator/info"),
    SamplePlan("Actuator Metrics", "GET", "/actuator/metrics"),
    SamplePlan("Swagger UI", "GET", "/swagger-ui.html"),
    SamplePlan("OpenAPI Docs", "GET", "/v3/api-docs"),
    SamplePlan("Create Itinerary", "POST", "/api/itineraries", PERFORMANCE_ITINERARY_BODY),
    SamplePlan("Update Itinerary", "PUT", f"/api/itineraries/{MISSING_ID}", {"city": "Updated Performance Test City"}),
    SamplePlan("Delete Itinerary", "DELETE", f"/api/itineraries/{MISSING_ID}"),
)


def throwaway_plan(itinerary_id: str) -> tuple[SamplePlan, ...]:
    """Samples taken against an itinerary created for the run."""
    return (
        SamplePlan("Get Itinerary", "GET", f"/api/itineraries/{itinerary_id}"),
        SamplePlan(
            "Add Item",
            "POST",
            f"/api/itineraries/{itinerary_id}/days/1/items",
            {"value": "Performance test item"},
        ),
        SamplePlan("Remove Item", "DELETE", f"/api/itineraries/{itinerary_id}/days/1/items/0"),
        SamplePlan("Get Media", "GET", f"/api/v1/itineraries/{itinerary_id}/media"),
        SamplePlan("Create Media", "POST", f"/api/v1/itineraries/{itinerary_id}/media"),
        SamplePlan("Delete Media", "DELETE", f"/api/v1/itineraries/{itinerary_id}/media"),
    )


THROWAWAY_SAMPLE_COUNT = len(throwaway_plan("placeholder"))

WEB_PLAN: tuple[SamplePlan, ...] = (
    SamplePlan("Health Check", "GET", "/api/health"),
    SamplePlan("List Destinations", "GET", "/api/destinations"),
    SamplePlan("List Accommodations", "GET", "/api/accommodations"),
    SamplePlan("Auth Login", "POST", "/api/auth/login", {"email": "test@musafirgo.com", "password": "password"}),
    SamplePlan(
        "Auth Register",
        "POST",
        "/api/auth/register",
        {"email": "perf@test.com", "password": "password", "name": "Perf User"},
    ),
    SamplePlan("Auth Me", "GET", "/api/auth/me"),
)
