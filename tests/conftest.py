"""
Shared pytest fixtures: visit histories, patient profiles and seeded rngs.
"""

import random

import pytest


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def high_risk_visits():
    return [{
        'GESTATIONAL_AGE_WEEKS': 28,
        'HEMOGLOBIN_LEVEL': 9.2,
        'BLOOD_PRESSURE': '148/95',
        'FUNDAL_HEIGHT': 33,
        'MATERNAL_WEIGHT': 68,
    }]


@pytest.fixture
def high_risk_patient():
    return {'AGE': 17, 'BMI_VALUE': 32, 'PARITY': 0}


@pytest.fixture
def routine_visits():
    """Three ANC visits, deliberately out of chronological order."""
    return [
        {
            'GESTATIONAL_AGE_WEEKS': 24,
            'MATERNAL_WEIGHT': 62.0,
            'FUNDAL_HEIGHT': 24,
            'HEMOGLOBIN_LEVEL': 11.8,
            'BLOOD_PRESSURE': '118/76',
            'FETAL_HEART_RATE': 142,
            'VISIT_DATE': '2025-03-01',
        },
        {
            'GESTATIONAL_AGE_WEEKS': 16,
            'MATERNAL_WEIGHT': 60.0,
            'FUNDAL_HEIGHT': 16,
            'HEMOGLOBIN_LEVEL': 12.2,
            'BLOOD_PRESSURE': '112/72',
            'FETAL_HEART_RATE': 150,
            'VISIT_DATE': '2025-01-04',
        },
        {
            'GESTATIONAL_AGE_WEEKS': 30,
            'MATERNAL_WEIGHT': 64.5,
            'FUNDAL_HEIGHT': 30,
            'HEMOGLOBIN_LEVEL': 11.4,
            'BLOOD_PRESSURE': '120/78',
            'FETAL_HEART_RATE': 144,
            'COMPLICATIONS': 'none',
            'VISIT_DATE': '2025-04-12',
        },
    ]


@pytest.fixture
def routine_patient():
    return {
        'AGE': 29,
        'BMI_VALUE': 23.4,
        'PARITY': '1',
        'MEDICAL_HISTORY': 'No significant history',
        'BMI_STATUS': 'Normal',
    }
