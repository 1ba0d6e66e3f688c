"""
Explainability for the local expert: per-attribute score breakdown,
human-readable "why this crop?" text, and a breakdown bar chart for reports.
"""

from pathlib import Path

from farm_expert.config import FIGURES_DIR, SCORE_WEIGHTS, RANGE_READING_MAP, ensure_dirs
from farm_expert.crop_params import CropProfile
from farm_expert.schema import SensorReading
from farm_expert.scorer import score_breakdown

ATTRIBUTE_LABELS = {
    "n":        "nitrogen",
    "p":        "phosphorus",
    "k":        "potassium",
    "ph":       "pH",
    "temp":     "temperature",
    "moisture": "moisture",
    "soil":     "soil type",
}


def explain_score(profile: CropProfile, soil_type: str, reading, top_n: int = 3) -> str:
    """
    Short explanation of a crop's score: the attributes that matched fully,
    and the ones that pulled the score down (out of range or not reported).
    """
    reading = SensorReading.coerce(reading)
    breakdown = score_breakdown(profile, soil_type, reading)
    matched, weak, missing = [], [], []
    for attr, weight in SCORE_WEIGHTS.items():
        label = ATTRIBUTE_LABELS[attr]
        if attr != "soil" and getattr(reading, RANGE_READING_MAP[attr]) is None:
            missing.append(label)
        elif breakdown[attr] >= weight:
            matched.append(label)
        else:
            weak.append((breakdown[attr] / weight, label))

    parts = [f"{profile.name} scores {breakdown['total']:.1f}/100."]
    if matched:
        parts.append("Within range: " + ", ".join(matched) + ".")
    if weak:
        weakest = [label for _, label in sorted(weak)[:top_n]]
        parts.append("Limiting factors: " + ", ".join(weakest) + ".")
    if missing:
        parts.append("No reading for " + ", ".join(missing) + " (scored as neutral).")
    return " ".join(parts)


def plot_score_breakdown(breakdown: dict, title: str = "Suitability breakdown", save_path: Path | None = None):
    """Horizontal bar chart of weighted contribution vs. weight; saves to reports/figures/."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    ensure_dirs()
    path = save_path or (FIGURES_DIR / "score_breakdown.png")
    names = [ATTRIBUTE_LABELS[a] for a in SCORE_WEIGHTS]
    weights = [SCORE_WEIGHTS[a] for a in SCORE_WEIGHTS]
    values = [breakdown.get(a, 0.0) for a in SCORE_WEIGHTS]
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.barh(names, weights, color="lightgrey", alpha=0.8, label="weight")
    ax.barh(names, values, color="seagreen", alpha=0.9, label="contribution")
    ax.set_xlabel("Points")
    ax.set_title(title)
    ax.legend(loc="lower right")
    plt.tight_layout()
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
    return path
