"""
Domain store: users, patients and incidents.

Collections live in memory and every mutation writes the affected
collections back to the storage backend in full. The in-memory state is
authoritative; a failed write is logged and the session carries on.
"""

import json
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from ..core.exceptions import (
    DanglingReferenceError,
    DuplicateEntityError,
    EntityNotFoundError,
    StorageWriteError,
)
from ..data.seed import seed_collections
from ..schemas.analytics import DashboardStats
from ..schemas.records import (
    Incident,
    IncidentCreate,
    Patient,
    PatientCreate,
    Role,
    User,
    UserCreate,
)
from ..utils.identifiers import generate_id
from .metrics_service import dashboard_stats
from .storage_service import StorageBackend, StorageKeys

logger = logging.getLogger(__name__)


class DataStore:
    """
    In-memory collections mirrored to a key-value storage backend.

    Lifecycle: ``load()`` (read or seed) -> mutations -> ``flush()``.
    Accessors return None on a miss; update/delete raise EntityNotFoundError.
    """

    def __init__(self, storage: StorageBackend, seed_on_empty: bool = True):
        """
        Initialize the store. Call ``load()`` before use.

        Args:
            storage: Backend the collections are written to
            seed_on_empty: Write the built-in dataset when storage is empty
        """
        self.storage = storage
        self.seed_on_empty = seed_on_empty
        self.users: List[User] = []
        self.patients: List[Patient] = []
        self.incidents: List[Incident] = []
        self.persisted = True
        self._hold_writes = False
        self._reindex()

    # ============================================================
    # LIFECYCLE
    # ============================================================

    def load(self) -> "DataStore":
        """
        Read all three collections, or seed them together.

        Partially present, unreadable or invalid stored data is discarded
        and replaced by the seed as a whole, never mixed with it. With
        seeding off, such data is left untouched in storage and the store
        starts empty without writing anything.
        """
        blobs = {key: self.storage.get(key) for key in StorageKeys.COLLECTIONS}
        missing = [key for key, blob in blobs.items() if not blob]
        damaged = False
        self._hold_writes = False

        if not missing:
            try:
                users, patients, incidents = self._parse(
                    {key: json.loads(blob) for key, blob in blobs.items()}
                )
                self._set_state(users, patients, incidents)
                self._drop_orphaned_incidents()
                logger.info(
                    f"Loaded {len(self.users)} users, {len(self.patients)} patients, "
                    f"{len(self.incidents)} incidents"
                )
                return self
            except (ValueError, TypeError) as e:
                damaged = True
                logger.warning(f"Stored data is malformed: {e}")
        elif len(missing) < len(StorageKeys.COLLECTIONS):
            damaged = True
            logger.warning(f"Stored data is incomplete (missing {missing})")

        if not self.seed_on_empty:
            self._set_state([], [], [])
            if damaged:
                self._hold_writes = True
                self.persisted = False
                logger.warning("Seeding is off; stored data is left as it is and not overwritten")
            else:
                self._persist(StorageKeys.COLLECTIONS)
            return self

        users, patients, incidents = self._parse(seed_collections())
        self._set_state(users, patients, incidents)
        self._persist(StorageKeys.COLLECTIONS)
        logger.info("Seeded storage with the built-in dataset")
        return self

    def flush(self) -> None:
        """Write every collection; used at teardown."""
        self._persist(StorageKeys.COLLECTIONS)

    def close(self) -> None:
        self.flush()
        self.storage.close()

    def snapshot(self) -> Dict[str, list]:
        """Deep copy of the three collections."""
        return {
            StorageKeys.USERS: [u.model_copy(deep=True) for u in self.users],
            StorageKeys.PATIENTS: [p.model_copy(deep=True) for p in self.patients],
            StorageKeys.INCIDENTS: [i.model_copy(deep=True) for i in self.incidents],
        }

    # ============================================================
    # USERS
    # ============================================================

    def add_user(self, data: UserCreate, user_id: Optional[str] = None) -> User:
        """Create a user; the email must not already be registered."""
        if self.get_user_by_email(data.email):
            raise DuplicateEntityError(f"An account with this email already exists: {data.email}")
        if data.role == Role.PATIENT and data.patient_id not in self._patients_by_id:
            raise DanglingReferenceError("User", "patientId", data.patient_id)

        user = self._new_user(data, user_id)
        self._commit(users=self.users + [user])
        return user

    def update_user(self, user: User) -> User:
        if user.id not in self._users_by_id:
            raise EntityNotFoundError("User", user.id)
        if user.role == Role.PATIENT and user.patient_id not in self._patients_by_id:
            raise DanglingReferenceError("User", "patientId", user.patient_id)
        other = self.get_user_by_email(user.email)
        if other and other.id != user.id:
            raise DuplicateEntityError(f"An account with this email already exists: {user.email}")

        self._commit(users=[user if u.id == user.id else u for u in self.users])
        return user

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self._users_by_id.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = (email or "").strip().lower()
        return next((u for u in self.users if u.email.lower() == wanted), None)

    def create_patient_account(
        self, email: str, password: str, patient_data: PatientCreate
    ) -> Tuple[User, Patient]:
        """
        Create a Patient-role user and its patient record together.

        Both records reference each other and are persisted in one write.
        """
        if self.get_user_by_email(email):
            raise DuplicateEntityError(f"An account with this email already exists: {email}")

        user_id = generate_id("u", self._users_by_id)
        patient_id = generate_id("p", self._patients_by_id)

        patient = self._new_patient(
            patient_data.model_copy(update={"user_id": user_id}), patient_id
        )
        user = self._new_user(
            UserCreate(
                role=Role.PATIENT,
                email=email,
                password=password,
                name=patient.name,
                patient_id=patient_id,
            ),
            user_id,
        )

        self._commit(users=self.users + [user], patients=self.patients + [patient])
        logger.info(f"Registered patient account {user.id} -> {patient.id}")
        return user, patient

    # ============================================================
    # PATIENTS
    # ============================================================

    def create_patient(self, data: PatientCreate, patient_id: Optional[str] = None) -> Patient:
        """
        Add a patient with a fresh id and creation timestamp.

        Args:
            data: Patient fields
            patient_id: Explicit id; must not be in use

        Returns:
            The stored patient
        """
        if patient_id is not None and patient_id in self._patients_by_id:
            raise DuplicateEntityError(f"Patient id already in use: {patient_id}")

        patient = self._new_patient(data, patient_id)
        self._commit(patients=self.patients + [patient])
        return patient

    def update_patient(self, patient: Patient) -> Patient:
        """Replace the patient with the same id."""
        if patient.id not in self._patients_by_id:
            raise EntityNotFoundError("Patient", patient.id)

        self._commit(patients=[patient if p.id == patient.id else p for p in self.patients])
        return patient

    def delete_patient(self, patient_id: str) -> int:
        """
        Delete a patient and every incident that references it.

        Returns:
            Number of incidents removed with the patient
        """
        if patient_id not in self._patients_by_id:
            raise EntityNotFoundError("Patient", patient_id)

        patients = [p for p in self.patients if p.id != patient_id]
        incidents = [i for i in self.incidents if i.patient_id != patient_id]
        removed = len(self.incidents) - len(incidents)

        self._commit(patients=patients, incidents=incidents)
        logger.info(f"Deleted patient {patient_id} and {removed} incident(s)")
        return removed

    def get_patient_by_id(self, patient_id: str) -> Optional[Patient]:
        return self._patients_by_id.get(patient_id)

    def get_patient_by_user_id(self, user_id: str) -> Optional[Patient]:
        patient = next((p for p in self.patients if p.user_id == user_id), None)
        if patient is None:
            user = self.get_user_by_id(user_id)
            if user and user.patient_id:
                patient = self.get_patient_by_id(user.patient_id)
        return patient

    # ============================================================
    # INCIDENTS
    # ============================================================

    def create_incident(self, data: IncidentCreate) -> Incident:
        """
        Book an incident for an existing patient.

        Raises:
            DanglingReferenceError: If ``data.patient_id`` is unknown
        """
        self._require_patient(data.patient_id)

        incident = Incident(
            **data.model_dump(),
            id=generate_id("i", self._incidents_by_id),
            created_at=datetime.now(),
        )
        self._commit(incidents=self.incidents + [incident])
        return incident

    def update_incident(self, incident: Incident) -> Incident:
        """Replace the incident with the same id and stamp updated_at."""
        if incident.id not in self._incidents_by_id:
            raise EntityNotFoundError("Incident", incident.id)
        self._require_patient(incident.patient_id)

        incident = incident.model_copy(update={"updated_at": datetime.now()})
        self._commit(incidents=[incident if i.id == incident.id else i for i in self.incidents])
        return incident

    def delete_incident(self, incident_id: str) -> None:
        if incident_id not in self._incidents_by_id:
            raise EntityNotFoundError("Incident", incident_id)
        self._commit(incidents=[i for i in self.incidents if i.id != incident_id])

    def get_incident_by_id(self, incident_id: str) -> Optional[Incident]:
        return self._incidents_by_id.get(incident_id)

    def get_incidents_by_patient(self, patient_id: str) -> List[Incident]:
        return [i for i in self.incidents if i.patient_id == patient_id]

    def incidents_visible_to(self, user: User) -> List[Incident]:
        """Admins see every incident, patients only their own."""
        if user.role == Role.ADMIN:
            return list(self.incidents)
        if not user.patient_id:
            return []
        return self.get_incidents_by_patient(user.patient_id)

    # ============================================================
    # STATS
    # ============================================================

    def get_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        """Dashboard aggregates over the current collections."""
        return dashboard_stats(self.patients, self.incidents, now=now)

    # ============================================================
    # INTERNALS
    # ============================================================

    def _new_user(self, data: UserCreate, user_id: Optional[str]) -> User:
        return User(
            **data.model_dump(),
            id=user_id or generate_id("u", self._users_by_id),
            created_at=datetime.now(),
        )

    def _new_patient(self, data: PatientCreate, patient_id: Optional[str]) -> Patient:
        return Patient(
            **data.model_dump(),
            id=patient_id or generate_id("p", self._patients_by_id),
            created_at=datetime.now(),
        )

    def _require_patient(self, patient_id: str) -> None:
        if patient_id not in self._patients_by_id:
            raise DanglingReferenceError("Incident", "patientId", patient_id)

    @staticmethod
    def _parse(raw: Dict[str, object]) -> Tuple[List[User], List[Patient], List[Incident]]:
        """Validate raw collections; raises ValueError on any bad record."""
        for key in StorageKeys.COLLECTIONS:
            if not isinstance(raw.get(key), list):
                raise ValueError(f"Collection '{key}' is not a list")
        try:
            users = [User.model_validate(r) for r in raw[StorageKeys.USERS]]
            patients = [Patient.model_validate(r) for r in raw[StorageKeys.PATIENTS]]
            incidents = [Incident.model_validate(r) for r in raw[StorageKeys.INCIDENTS]]
        except ValidationError as e:
            raise ValueError(str(e))

        for records in (users, patients, incidents):
            ids = [r.id for r in records]
            if len(ids) != len(set(ids)):
                raise ValueError("Duplicate ids in stored collection")
        return users, patients, incidents

    def _drop_orphaned_incidents(self) -> None:
        orphans = [i.id for i in self.incidents if i.patient_id not in self._patients_by_id]
        if orphans:
            logger.warning(f"Dropping {len(orphans)} incident(s) with unknown patients: {orphans}")
            self._commit(
                incidents=[i for i in self.incidents if i.patient_id in self._patients_by_id]
            )

    def _set_state(
        self, users: Iterable[User], patients: Iterable[Patient], incidents: Iterable[Incident]
    ) -> None:
        self.users = list(users)
        self.patients = list(patients)
        self.incidents = list(incidents)
        self._reindex()

    def _reindex(self) -> None:
        self._users_by_id = {u.id: u for u in self.users}
        self._patients_by_id = {p.id: p for p in self.patients}
        self._incidents_by_id = {i.id: i for i in self.incidents}

    def _commit(
        self,
        users: Optional[List[User]] = None,
        patients: Optional[List[Patient]] = None,
        incidents: Optional[List[Incident]] = None,
    ) -> None:
        """Swap in the new collections together, then persist them."""
        changed = []
        if users is not None:
            self.users = users
            changed.append(StorageKeys.USERS)
        if patients is not None:
            self.patients = patients
            changed.append(StorageKeys.PATIENTS)
        if incidents is not None:
            self.incidents = incidents
            changed.append(StorageKeys.INCIDENTS)
        self._reindex()
        self._persist(changed)

    def _persist(self, keys: Iterable[str]) -> None:
        collections = {
            StorageKeys.USERS: self.users,
            StorageKeys.PATIENTS: self.patients,
            StorageKeys.INCIDENTS: self.incidents,
        }
        blobs = {
            key: json.dumps([record.to_storage() for record in collections[key]])
            for key in keys
        }
        if not blobs:
            return
        if self._hold_writes:
            self.persisted = False
            logger.warning(f"Not writing {sorted(blobs)}: stored data was unreadable at load")
            return
        try:
            self.storage.set_many(blobs)
            self.persisted = True
        except StorageWriteError as e:
            self.persisted = False
            logger.warning(f"Changes kept in memory only, storage write failed: {e}")
