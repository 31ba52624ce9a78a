from __future__ import annotations

from typing import Dict, List

# CSV header names, kept verbatim (embedded spaces included)
GENDER = "Gender"
AGE = "Age"
OCCUPATION = "Occupation"
SLEEP_DURATION = "Sleep Duration"
QUALITY_OF_SLEEP = "Quality of Sleep"
PHYSICAL_ACTIVITY = "Physical Activity Level"
STRESS_LEVEL = "Stress Level"
DAILY_STEPS = "Daily Steps"
HEART_RATE = "Heart Rate"
SLEEP_DISORDER = "Sleep Disorder"

CATEGORICAL_COLUMNS: List[str] = [GENDER, OCCUPATION, SLEEP_DISORDER]

# column -> target dtype after coercion
NUMERIC_COLUMNS: Dict[str, str] = {
    AGE: "int64",
    SLEEP_DURATION: "float64",
    QUALITY_OF_SLEEP: "int64",
    PHYSICAL_ACTIVITY: "int64",
    STRESS_LEVEL: "int64",
    DAILY_STEPS: "int64",
    HEART_RATE: "int64",
}

REQUIRED_COLUMNS: List[str] = [
    GENDER,
    AGE,
    OCCUPATION,
    SLEEP_DURATION,
    QUALITY_OF_SLEEP,
    PHYSICAL_ACTIVITY,
    STRESS_LEVEL,
    DAILY_STEPS,
    HEART_RATE,
    SLEEP_DISORDER,
]
