"""Waiting lists for therapy resources and the list of early patients."""

from __future__ import annotations

import random
from typing import Optional

from clinisim.containers import LinkedQueue, PriQueue
from clinisim.patient import Patient

MAX_RESCHEDULE_DELAY = 20


def _arrival_key(patient: Patient) -> int:
    return patient.pt + patient.penalty


class EUWaitList(LinkedQueue[Patient]):
    """Waiting list that tracks the total duration of the treatments it holds."""

    def __init__(self) -> None:
        super().__init__()
        self._total_time = 0

    def insert_sorted(self, patient: Patient) -> None:
        """Insert by appointment time plus penalty, after any equal entries."""
        self._total_time += patient.treatment_duration()
        items = self._items
        key = _arrival_key(patient)
        if not items:
            items.append(patient)
        elif key < _arrival_key(items[0]):
            items.appendleft(patient)
        elif key >= _arrival_key(items[-1]):
            items.append(patient)
        else:
            position = next(
                index
                for index, other in enumerate(items)
                if index > 0 and key < _arrival_key(other)
            )
            items.insert(position, patient)

    def enqueue(self, patient: Patient) -> None:
        """Add a patient at the back."""
        self._total_time += patient.treatment_duration()
        super().enqueue(patient)

    def dequeue(self) -> Patient:
        """Remove and return the front patient; IndexError when empty."""
        patient = super().dequeue()
        self._total_time -= patient.treatment_duration()
        return patient

    def treatment_latency(self) -> int:
        """Total duration of the next treatments of all waiting patients."""
        return self._total_time


class XWaitList(EUWaitList):
    """Exercise-room waiting list, whose patients may cancel."""

    def cancel(self, probability: int, rng: random.Random) -> Optional[Patient]:
        """With ``probability`` percent, try to cancel a random waiting patient.

        Only a patient whose last treatment is pending may cancel. Returns the
        cancelled patient, removed from the list, or None.
        """
        roll = rng.randint(0, 100)
        if roll >= probability or not self._items:
            return None
        index = rng.randrange(len(self._items))
        patient = self._items[index]
        duration = patient.cancel()
        if duration is None:
            return None
        del self._items[index]
        self._total_time -= duration
        return patient


class EarlyPList(PriQueue[Patient]):
    """Patients who arrived before their appointment, earliest appointment first."""

    def reschedule(self, probability: int, rng: random.Random) -> bool:
        """With ``probability`` percent, push a random patient's appointment back.

        The delay is drawn from 0 to 20 time steps. A patient is rescheduled at
        most once. Returns True when a patient was rescheduled.
        """
        roll = rng.randint(0, 100)
        delay = rng.randint(0, MAX_RESCHEDULE_DELAY)
        if roll >= probability or not self._entries:
            return False
        index = rng.randrange(len(self._entries))
        priority, patient = self._entries[index]
        if patient.rescheduled:
            return False
        del self._entries[index]
        patient.reschedule(-priority + delay)
        self.enqueue(patient, -patient.pt)
        return True