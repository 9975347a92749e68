"""Patients and their treatment plans."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Iterable, Optional

from clinisim.containers import LinkedQueue
from clinisim.treatments import Treatment


class PatientState(Enum):
    """Where a patient currently is in the clinic."""

    NOT_ARRIVED = auto()
    EARLY = auto()
    LATE = auto()
    WAITING = auto()
    IN_TREATMENT = auto()
    FINISHED = auto()


class Patient:
    """A patient with an appointment time (pt), arrival time (vt) and treatments."""

    def __init__(
        self,
        pt: int,
        vt: int,
        treatments: Iterable[Treatment],
        kind: str,
        patient_id: int,
    ) -> None:
        self.id = patient_id
        self.pt = pt
        self.vt = vt
        self.tt = 0
        self.ft = -1
        self.kind = kind
        self.penalty = (vt - pt) // 2 if vt > pt else 0
        self.state = PatientState.NOT_ARRIVED
        self.canceled = False
        self.rescheduled = False
        self._treatments: LinkedQueue[Treatment] = LinkedQueue(treatments)

    @property
    def treatments(self) -> tuple[Treatment, ...]:
        """Remaining treatments, next one first."""
        return tuple(self._treatments)

    def check(self, current_time: int, scheduler: Any) -> bool:
        """Whether the patient is ready to leave their current list."""
        if self.state is PatientState.NOT_ARRIVED:
            return self.vt <= current_time
        if self.state is PatientState.EARLY:
            return self.pt <= current_time
        if self.state is PatientState.LATE:
            return self.vt + self.penalty <= current_time
        if self.state is PatientState.IN_TREATMENT:
            treatment = self.next_treatment()
            return treatment is not None and treatment.is_finished(current_time)
        if self.state is PatientState.WAITING:
            treatment = self.next_treatment()
            return treatment is not None and treatment.can_assign(scheduler)
        return True

    def treatment_duration(self) -> int:
        """Duration of the next treatment, or 0 when none is left."""
        treatment = self.next_treatment()
        return treatment.duration if treatment is not None else 0

    def total_waiting_time(self) -> int:
        """Time spent in the clinic not being treated."""
        return self.ft - self.vt - self.tt

    def rearrange_treatments(self, scheduler: Any) -> None:
        """Move the treatment with the shortest waiting list to the front.

        Normal patients ('N') keep their prescribed order.
        """
        if self.kind == "N" or not self._treatments:
            return
        remaining = iter(self._treatments)
        best = next(remaining)
        best_latency = best.list_latency(scheduler)
        rest: list[Treatment] = []
        for treatment in remaining:
            latency = treatment.list_latency(scheduler)
            if latency < best_latency:
                rest.append(best)
                best, best_latency = treatment, latency
            else:
                rest.append(treatment)
        self._treatments = LinkedQueue([best, *rest])

    def cancel(self) -> Optional[int]:
        """Cancel the last remaining treatment.

        Returns its duration, or None when more than one treatment is left.
        """
        if len(self._treatments) > 1:
            return None
        treatment = self._treatments.dequeue()
        self.canceled = True
        return treatment.duration

    def reschedule(self, new_pt: int) -> None:
        """Move the appointment to ``new_pt``."""
        self.pt = new_pt
        self.rescheduled = True

    def add_treatment_time(self, time: int) -> None:
        """Add to the total time spent in treatment."""
        self.tt += time

    def finish_treatment(self) -> Treatment:
        """Remove and return the current treatment."""
        return self._treatments.dequeue()

    def next_treatment(self) -> Optional[Treatment]:
        """The next treatment, or None when none is left."""
        return self._treatments.peek() if self._treatments else None

    def assigned_resource_data(self) -> str:
        """Resource label of the current treatment, e.g. ``E1``."""
        treatment = self.next_treatment()
        if treatment is None:
            raise ValueError("patient has no treatment in progress")
        return treatment.resource_data()

    def __str__(self) -> str:
        if self.state is PatientState.NOT_ARRIVED:
            return f"P{self.id}_{self.vt}"
        if self.state is PatientState.IN_TREATMENT:
            return f"P{self.id}_{self.assigned_resource_data()}"
        return str(self.id)

    def __repr__(self) -> str:
        return f"Patient(id={self.id}, kind={self.kind!r}, state={self.state.name})"