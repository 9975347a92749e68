import random

import pytest

from clinisim.patient import Patient
from clinisim.treatments import ETherapy, XTherapy
from clinisim.waitlists import EarlyPList, EUWaitList, XWaitList


class _ScriptedRng:
    def __init__(self, values):
        self._values = iter(values)

    def randint(self, low, high):
        value = next(self._values)
        assert low <= value <= high
        return value

    def randrange(self, stop):
        value = next(self._values)
        assert 0 <= value < stop
        return value


def _patient(pid, pt, vt=None, durations=(5,), therapy=ETherapy):
    vt = pt if vt is None else vt
    return Patient(pt, vt, [therapy(d) for d in durations], "R", pid)


def test_enqueue_and_dequeue_track_latency():
    wl = EUWaitList()
    wl.enqueue(_patient(1, 3, durations=(4,)))
    wl.enqueue(_patient(2, 1, durations=(7,)))
    assert wl.treatment_latency() == 4 + 7
    first = wl.dequeue()
    assert first.id == 1
    assert wl.treatment_latency() == 7
    wl.dequeue()
    assert wl.treatment_latency() == 0
    assert len(wl) == 0


def test_dequeue_empty_raises():
    with pytest.raises(IndexError):
        EUWaitList().dequeue()


def test_insert_sorted_orders_by_appointment_plus_penalty():
    wl = EUWaitList()
    wl.insert_sorted(_patient(1, 10))
    wl.insert_sorted(_patient(2, 2))
    wl.insert_sorted(_patient(3, 20))
    wl.insert_sorted(_patient(4, 12))
    assert [p.id for p in wl] == [2, 1, 4, 3]
    keys = [p.pt + p.penalty for p in wl]
    assert keys == sorted(keys)


def test_insert_sorted_equal_keys_keep_arrival_order():
    wl = EUWaitList()
    for pid in (1, 2, 3):
        wl.insert_sorted(_patient(pid, 5))
    wl.insert_sorted(_patient(4, 1))
    wl.insert_sorted(_patient(5, 5))
    assert [p.id for p in wl] == [4, 1, 2, 3, 5]


def test_insert_sorted_uses_penalty():
    wl = EUWaitList()
    late = _patient(1, 2, vt=10)  # penalty 4 -> key 6
    wl.insert_sorted(late)
    wl.insert_sorted(_patient(2, 5))
    assert [p.id for p in wl] == [2, 1]


def test_insert_sorted_adds_latency():
    wl = EUWaitList()
    wl.insert_sorted(_patient(1, 1, durations=(3, 9)))
    wl.insert_sorted(_patient(2, 2, durations=(6,)))
    assert wl.treatment_latency() == 3 + 6


def test_cancel_never_with_zero_probability():
    wl = XWaitList()
    wl.enqueue(_patient(1, 1, therapy=XTherapy))
    assert wl.cancel(0, random.Random(1)) is None
    assert len(wl) == 1


def test_cancel_on_empty_list_returns_none():
    assert XWaitList().cancel(101, random.Random(1)) is None


def test_cancel_single_patient_always():
    wl = XWaitList()
    patient = _patient(1, 1, durations=(4,), therapy=XTherapy)
    wl.enqueue(patient)
    cancelled = wl.cancel(101, random.Random(7))
    assert cancelled is patient
    assert patient.canceled
    assert len(wl) == 0
    assert wl.treatment_latency() == 0
    assert patient.next_treatment() is None


def test_cancel_refused_with_several_treatments():
    wl = XWaitList()
    patient = _patient(1, 1, durations=(4, 2), therapy=XTherapy)
    wl.enqueue(patient)
    assert wl.cancel(101, _ScriptedRng([0, 0])) is None
    assert not patient.canceled
    assert len(wl) == 1
    assert wl.treatment_latency() == 4


def test_cancel_middle_patient():
    wl = XWaitList()
    patients = [_patient(i, i, durations=(i,), therapy=XTherapy) for i in (1, 2, 3)]
    for p in patients:
        wl.enqueue(p)
    cancelled = wl.cancel(50, _ScriptedRng([10, 1]))
    assert cancelled is patients[1]
    assert [p.id for p in wl] == [1, 3]
    assert wl.treatment_latency() == 1 + 3


def test_cancel_last_patient_keeps_queue_usable():
    wl = XWaitList()
    patients = [_patient(i, i, therapy=XTherapy) for i in (1, 2)]
    for p in patients:
        wl.enqueue(p)
    assert wl.cancel(50, _ScriptedRng([0, 1])) is patients[1]
    extra = _patient(9, 9, therapy=XTherapy)
    wl.enqueue(extra)
    assert [p.id for p in wl] == [1, 9]


def test_cancel_roll_at_probability_fails():
    wl = XWaitList()
    wl.enqueue(_patient(1, 1, therapy=XTherapy))
    assert wl.cancel(30, _ScriptedRng([30])) is None
    assert len(wl) == 1


def test_reschedule_head_patient():
    early = EarlyPList()
    patient = _patient(1, 10, vt=4)
    early.enqueue(patient, -patient.pt)
    assert early.reschedule(50, _ScriptedRng([0, 5, 0]))
    assert patient.rescheduled
    assert patient.pt == 10 + 5
    assert early.peek() == (patient, -patient.pt)


def test_reschedule_only_once():
    early = EarlyPList()
    patient = _patient(1, 10, vt=4)
    early.enqueue(patient, -patient.pt)
    early.reschedule(50, _ScriptedRng([0, 5, 0]))
    assert not early.reschedule(50, _ScriptedRng([0, 5, 0]))
    assert patient.pt == 10 + 5


def test_reschedule_moves_patient_to_new_position():
    early = EarlyPList()
    a = _patient(1, 5, vt=1)
    b = _patient(2, 8, vt=1)
    c = _patient(3, 12, vt=1)
    for p in (a, b, c):
        early.enqueue(p, -p.pt)
    assert early.reschedule(100, _ScriptedRng([99, 20, 1]))
    assert b.pt == 8 + 20
    assert [p.id for p in early] == [1, 3, 2]
    assert len(early) == 3


def test_reschedule_not_triggered():
    early = EarlyPList()
    patient = _patient(1, 10, vt=4)
    early.enqueue(patient, -patient.pt)
    assert not early.reschedule(0, random.Random(3))
    assert not patient.rescheduled
    assert not EarlyPList().reschedule(101, random.Random(3))