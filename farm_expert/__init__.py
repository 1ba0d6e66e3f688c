"""
Local expert crop advisor — core package.
"""

from farm_expert.crop_params import CROP_PROFILES, CropProfile
from farm_expert.schema import FieldDescriptor, SensorReading
from farm_expert.scorer import recommend, score_crops
from farm_expert.soil_health import soil_insight
from farm_expert.management import prescription, roadmap
from farm_expert.advisor import advise_field

__all__ = [
    "CROP_PROFILES",
    "CropProfile",
    "FieldDescriptor",
    "SensorReading",
    "recommend",
    "score_crops",
    "soil_insight",
    "prescription",
    "roadmap",
    "advise_field",
]
