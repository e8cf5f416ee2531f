from __future__ import annotations

from decimal import Decimal

from app.domain.entities.service_catalog import Service

SERVICE_CATALOG: dict[str, Service] = {
    "standard": Service(
        id="standard",
        name="Standard",
        description="Our classic deep clean.",
        price=Decimal("30"),
        features=("Deep Clean", "Lace Cleaning", "Midsole Treatment", "Deodorization"),
    ),
    "express": Service(
        id="express",
        name="Express",
        description="Standard clean with extras.",
        price=Decimal("40"),
        features=(
            "Everything in Standard",
            "Minor Scuff Removal",
            "Protective Coating",
            "48-Hour Turnaround",
        ),
        best_value=True,
    ),
    "sameday": Service(
        id="sameday",
        name="Same-Day VIP",
        description="The full works, same day.",
        price=Decimal("50"),
        features=(
            "Everything in Express",
            "Premium Restoration",
            "Waterproofing",
            "Same-Day Service",
        ),
    ),
}
