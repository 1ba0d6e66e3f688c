"""
Field advisor: assemble the full advisory report for one field.

The dashboard prefers the remote generative-AI advisor and falls back to the
local expert whenever the remote call fails or comes back empty. The remote
client itself lives outside this package; any object exposing

    crop_analysis(field, reading)    -> list of recommendation dicts
    soil_insight(field, reading)     -> soil insight dict
    prescription(field, reading)     -> prescription dict
    management_plan(field, reading)  -> list of task dicts

can be passed as `remote`. Missing methods count as a failed call.
"""

import logging

from farm_expert.config import TOP_N_CROPS
from farm_expert.management import prescription, roadmap
from farm_expert.schema import FieldDescriptor, SensorReading
from farm_expert.scorer import recommend
from farm_expert.soil_health import soil_insight

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Quick suggestion (single crop, used by the advisor widget)
# ---------------------------------------------------------------------------

def quick_suggestion(soil_type: str, ph: float | None = None, nitrogen: float | None = None) -> dict:
    """
    One crop plus a one-line reason, from soil type first, then pH, then nitrogen.
    Returns {"crop": str, "reason": str}.
    """
    if soil_type in ("Clay", "Clayey"):
        return {
            "crop": "Rice",
            "reason": "Clayey soil with high moisture retention is ideal for rice cultivation.",
        }
    if soil_type == "Black":
        return {
            "crop": "Cotton",
            "reason": "Black soil (Regur) is historically the best for cotton due to its mineral content.",
        }
    if soil_type == "Sandy":
        return {
            "crop": "Watermelon",
            "reason": "Sandy soil's high drainage prevents root rot in water-heavy fruits like watermelon.",
        }
    if ph is not None and ph < 5.5:
        return {
            "crop": "Boro Rice",
            "reason": "Acidic peaty soil is suitable for specific BARI-developed Boro rice varieties.",
        }
    if nitrogen is not None and nitrogen > 80:
        return {
            "crop": "Wheat",
            "reason": "High nitrogen levels support the heavy vegetative growth required for wheat.",
        }
    return {"crop": "General Crop", "reason": "Based on balanced soil parameters."}


# ---------------------------------------------------------------------------
# Remote-first report with local fallback
# ---------------------------------------------------------------------------

def _try_remote(remote, method: str, field: FieldDescriptor, reading: SensorReading):
    """Call remote.<method>; None on error or empty result."""
    call = getattr(remote, method, None)
    if call is None:
        log.warning("Remote advisor has no %s(); using local expert.", method)
        return None
    try:
        result = call(field, reading)
    except Exception as exc:
        log.warning("Remote %s failed (%s); using local expert.", method, exc)
        return None
    if not result:
        log.warning("Remote %s returned no data; using local expert.", method)
        return None
    return result


def advise_field(field, reading, remote=None, top_n: int = TOP_N_CROPS) -> dict:
    """
    Full advisory report for a field and its latest reading.

    Returns
    -------
    dict with keys:
        recommendations : list of recommendation dicts (best first)
        soil_insight    : {summary, soil_fertilizer}
        prescription    : {irrigation, nutrient}
        roadmap         : list of task dicts
        sources         : {section: "remote" | "local"}
    """
    field = FieldDescriptor.coerce(field)
    reading = SensorReading.coerce(reading)

    local = {
        "recommendations": lambda: [r.as_dict() for r in recommend(field, reading, top_n=top_n)],
        "soil_insight":    lambda: soil_insight(field, reading).as_dict(),
        "prescription":    lambda: prescription(field, reading).as_dict(),
        "roadmap":         lambda: [t.as_dict() for t in roadmap(field, reading)],
    }
    remote_methods = {
        "recommendations": "crop_analysis",
        "soil_insight":    "soil_insight",
        "prescription":    "prescription",
        "roadmap":         "management_plan",
    }

    report = {}
    sources = {}
    for section, build_local in local.items():
        result = None
        if remote is not None:
            result = _try_remote(remote, remote_methods[section], field, reading)
        if result is None:
            report[section] = build_local()
            sources[section] = "local"
        else:
            report[section] = list(result)[:top_n] if section == "recommendations" else result
            sources[section] = "remote"
    report["sources"] = sources
    log.info(
        "Advisory report for %s: %s",
        field.field_name or field.soil_type or "field",
        ", ".join(f"{k}={v}" for k, v in sources.items()),
    )
    return report
