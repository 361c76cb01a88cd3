"""
Patient Record Cache
Owned, reloadable in-memory copy of already-fetched patient records.

The cache never queries storage itself: it is handed a loader callable
returning {table_name: [row, ...]} (tables: patients, visits, deliveries,
babies). One instance per data set, e.g. delivered vs ongoing patients.
"""
import logging
import random
import threading
import time
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from pregnancy_forecast.config.settings import EngineSettings

from .prediction_engine import generate_prediction
from .schemas import PredictionResult
from .visit_normalizer import to_number

logger = logging.getLogger(__name__)

Loader = Callable[[], Mapping[str, Iterable[Dict[str, Any]]]]

TABLES = ('patients', 'visits', 'deliveries', 'babies')


class CacheNotReadyError(RuntimeError):
    """Raised by lookups before the first successful load."""


def _same_id(left: Any, right: Any) -> bool:
    left_number, right_number = to_number(left), to_number(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number
    if left is None or right is None:
        return False
    return str(left).strip() == str(right).strip()


class PatientRecordCache:

    def __init__(self, loader: Loader, name: str = 'main'):
        self.name = name
        self._loader = loader
        self._tables: Dict[str, List[Dict[str, Any]]] = {table: [] for table in TABLES}
        self._lock = threading.Lock()

        self.loaded = False
        self.loading = False
        self.error: Optional[str] = None
        self.loaded_at: Optional[str] = None

    def load(self) -> Dict[str, Any]:
        """
        Pull all tables from the loader.

        A load already in progress is not restarted. A failing loader
        leaves the previously cached data in place and records the error.
        """
        with self._lock:
            if self.loading:
                logger.info(f"[{self.name}] cache load already in progress")
                return self.status()
            self.loading = True

        logger.info(f"[{self.name}] loading patient records into cache")
        start = time.monotonic()

        try:
            tables = self._loader() or {}
            self._tables = {table: list(tables.get(table) or []) for table in TABLES}
            self.loaded = True
            self.error = None
            self.loaded_at = datetime.now().isoformat()

            elapsed_ms = (time.monotonic() - start) * 1000
            logger.info(
                f"[{self.name}] cache loaded in {elapsed_ms:.0f}ms: "
                f"{len(self._tables['patients'])} patients, {len(self._tables['visits'])} visits"
            )
        except Exception as e:
            logger.exception(f"[{self.name}] error loading cache")
            self.error = str(e)
        finally:
            with self._lock:
                self.loading = False

        return self.status()

    def reload(self) -> Dict[str, Any]:
        logger.info(f"[{self.name}] cache reload requested")
        return self.load()

    def status(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'loaded': self.loaded,
            'loading': self.loading,
            'error': self.error,
            'loaded_at': self.loaded_at,
            'counts': {table: len(rows) for table, rows in self._tables.items()},
        }

    def _require_loaded(self) -> None:
        if not self.loaded:
            raise CacheNotReadyError(f"{self.name} cache is still loading")

    def _rows_for_patient(self, table: str, patient_id: Any) -> List[Dict[str, Any]]:
        return [row for row in self._tables[table] if _same_id(row.get('PATIENT_ID'), patient_id)]

    def list_patients(self) -> List[Dict[str, Any]]:
        self._require_loaded()

        patients = []
        for patient in self._tables['patients']:
            name = f"{patient.get('FIRST_NAME') or ''} {patient.get('LAST_NAME') or ''}".strip()
            patients.append({
                'PATIENT_ID': patient.get('PATIENT_ID'),
                'PATIENT_NAME': name or 'Unknown Name',
            })
        return patients

    def find_patient(self, patient_id: Any) -> Optional[Dict[str, Any]]:
        self._require_loaded()

        for patient in self._tables['patients']:
            if _same_id(patient.get('PATIENT_ID'), patient_id):
                return patient
        return None

    def patient_details(self, patient_id: Any) -> Optional[Dict[str, Any]]:
        """
        Patient row with its visits, deliveries and babies.
        Babies are linked to the patient's deliveries through DELIVERY_ID.
        """
        patient = self.find_patient(patient_id)
        if patient is None:
            logger.info(f"[{self.name}] patient {patient_id} not found")
            return None

        visits = self._rows_for_patient('visits', patient_id)
        deliveries = self._rows_for_patient('deliveries', patient_id)

        delivery_ids = [d.get('DELIVERY_ID') for d in deliveries if d.get('DELIVERY_ID') is not None]
        babies = [
            baby for baby in self._tables['babies']
            if any(_same_id(baby.get('DELIVERY_ID'), delivery_id) for delivery_id in delivery_ids)
        ]

        logger.info(
            f"[{self.name}] patient {patient_id}: {len(visits)} visits, "
            f"{len(deliveries)} deliveries, {len(babies)} babies"
        )

        return {
            'patient': patient,
            'visits': visits,
            'deliveries': deliveries,
            'babies': babies,
            'source': 'cache',
        }

    def predict(self,
                patient_id: Any,
                rng: Optional[random.Random] = None,
                settings: Optional[EngineSettings] = None) -> Optional[PredictionResult]:
        """Run the rule-based forecast on the cached records of one patient."""
        details = self.patient_details(patient_id)
        if details is None:
            return None
        return generate_prediction(details['visits'], details['patient'], rng=rng, settings=settings)
