"""
Rule-Based Prediction Runner
Runs the forecast engine on a JSON file of {"visits": [...], "patient": {...}}
"""

import sys
import json
import random
import logging
from pathlib import Path

from pregnancy_forecast.config.settings import load_settings
from pregnancy_forecast.modules.prediction_engine import generate_prediction


def run(input_file: str, seed: str = None) -> int:
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger('predict')

    path = Path(input_file)
    if not path.exists():
        print(f"✗ Input file not found: {path}")
        return 1

    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        print(f"✗ Invalid JSON in {path}: {e}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"✗ Could not read {path}: {e}")
        return 1

    if not isinstance(payload, dict):
        print(f"✗ Expected a JSON object with 'visits' and 'patient' in {path}")
        return 1

    rng = None
    if seed is not None:
        try:
            rng = random.Random(int(seed))
        except ValueError:
            print(f"✗ Seed must be an integer, got {seed!r}")
            return 1

    logger.info(f"Running prediction for {path.name}")

    result = generate_prediction(
        payload.get('visits', []),
        payload.get('patient', {}),
        rng=rng,
        settings=settings,
    )

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python predict.py <input.json> [seed]")
        sys.exit(1)

    seed_arg = sys.argv[2] if len(sys.argv) > 2 else None
    sys.exit(run(sys.argv[1], seed_arg))
