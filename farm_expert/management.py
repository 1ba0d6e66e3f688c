"""
Management advisors: irrigation / nutrient prescription, the field roadmap,
and the management-hub alerts (water volume and NPK deficits).

All thresholds live in config. Prescription defaults: absent moisture counts
as 50 %, absent nitrogen as 50 ppm.
"""

import math

from farm_expert.config import (
    DEFAULT_MOISTURE,
    DEFAULT_NITROGEN,
    IRRIGATION_NEEDED_BELOW,
    IRRIGATION_HEAVY_BELOW,
    NITROGEN_NEEDED_BELOW,
    NITROGEN_HEAVY_BELOW,
    TARGET_MOISTURE,
    LITRES_PER_PCT_ACRE,
    NUTRIENT_TARGETS,
    NUTRIENT_PRODUCTS,
)
from farm_expert.schema import (
    SensorReading,
    IrrigationPlan,
    FertilizerDose,
    NutrientPlan,
    ManagementPrescription,
    ManagementTask,
)

SPLIT_DOSE_ADVICE = "Apply nitrogen in split doses for better absorption."

# Fixed seasonal roadmap (Kaggle + BARI calendar), highest priority first
ROADMAP_TASKS: tuple[ManagementTask, ...] = (
    ManagementTask(
        priority="HIGH",
        title="Kaggle-BARI Soil Prep",
        description="Deep plowing recommended to improve aeration based on soil density.",
        icon="fa-tractor",
    ),
    ManagementTask(
        priority="MEDIUM",
        title="BARI Seasonal Sync",
        description="Cross-verify planting dates with BARI seasonal calendar.",
        icon="fa-calendar-check",
    ),
    ManagementTask(
        priority="MEDIUM",
        title="NPK Balancing",
        description="Adjust Nitrogen levels based on the specific crop selected.",
        icon="fa-flask",
    ),
    ManagementTask(
        priority="LOW",
        title="Drainage Audit",
        description="Ensure field slope is optimal to prevent waterlogging.",
        icon="fa-water",
    ),
)


def prescription(field, reading) -> ManagementPrescription:
    """
    Irrigation and nutrient prescription for one reading.
    Volume / schedule are always filled in; callers check irrigation.needed
    before showing them.
    """
    reading = SensorReading.coerce(reading)
    moisture = DEFAULT_MOISTURE if reading.moisture is None else reading.moisture
    nitrogen = DEFAULT_NITROGEN if reading.npk_n is None else reading.npk_n

    heavy_irrigation = moisture < IRRIGATION_HEAVY_BELOW
    irrigation = IrrigationPlan(
        needed=moisture < IRRIGATION_NEEDED_BELOW,
        volume="25-30mm" if heavy_irrigation else "15-20mm",
        schedule="Daily" if heavy_irrigation else "Every 3 days",
    )
    nutrient = NutrientPlan(
        needed=nitrogen < NITROGEN_NEEDED_BELOW,
        fertilizers=(
            FertilizerDose(type="Urea", amount="75kg/Ha" if nitrogen < NITROGEN_HEAVY_BELOW else "40kg/Ha"),
            FertilizerDose(type="Organic Compost", amount="2 Ton/Ha"),
        ),
        advice=SPLIT_DOSE_ADVICE,
    )
    return ManagementPrescription(irrigation=irrigation, nutrient=nutrient)


def roadmap(field, reading) -> list[ManagementTask]:
    """Seasonal management roadmap. The same four tasks for every field."""
    return list(ROADMAP_TASKS)


# ---------------------------------------------------------------------------
# Management hub alerts
# ---------------------------------------------------------------------------

def water_requirement_litres(moisture: float | None, size_acres: float | None) -> int | None:
    """
    Approximate water needed to bring the field up to TARGET_MOISTURE.
    None when no water is needed, or when moisture or field size is unknown.
    """
    if moisture is None or size_acres is None or moisture >= TARGET_MOISTURE:
        return None
    deficit = TARGET_MOISTURE - moisture
    return int(math.floor(deficit * size_acres * LITRES_PER_PCT_ACRE + 0.5))


def fertilizer_deficits(reading) -> list[dict]:
    """
    N, P, K shortfalls against the management targets, in N, P, K order.
    Nutrients without a reading are skipped rather than reported as deficient.
    """
    reading = SensorReading.coerce(reading)
    needs = []
    for attr, target in NUTRIENT_TARGETS.items():
        value = getattr(reading, attr)
        if value is not None and value < target:
            needs.append({"type": NUTRIENT_PRODUCTS[attr], "deficit": target - value})
    return needs
