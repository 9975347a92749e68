"""Treatments a patient may need, each tied to one kind of resource."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from clinisim.resources import Resource


class Treatment(ABC):
    """A treatment of a fixed duration, possibly holding a resource."""

    def __init__(self, duration: int) -> None:
        self.duration = duration
        self.assignment_time = -1
        self.resource: Optional[Resource] = None

    def assign(self, resource: Resource, time: int) -> None:
        """Hand a resource to this treatment, starting at ``time``."""
        self.resource = resource
        self.assignment_time = time

    def is_finished(self, current: int) -> bool:
        """True once the treatment's duration has elapsed at ``current``."""
        return current >= self.assignment_time + self.duration

    def resource_data(self) -> str:
        """Kind letter and number of the assigned resource, e.g. ``E1``."""
        if self.resource is None:
            raise ValueError("no resource is assigned to this treatment")
        return f"{self.resource.kind}{self.resource.id}"

    @abstractmethod
    def can_assign(self, scheduler: Any) -> bool:
        """Whether the scheduler has a free resource for this treatment."""

    @abstractmethod
    def move_to_wait(self, scheduler: Any, patient: Any) -> None:
        """Place the patient on the waiting list for this treatment."""

    @abstractmethod
    def return_device(self, scheduler: Any) -> None:
        """Give the assigned resource back to the scheduler."""

    @abstractmethod
    def list_latency(self, scheduler: Any) -> int:
        """Total treatment time queued on this treatment's waiting list."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(duration={self.duration})"


class ETherapy(Treatment):
    """Electro therapy, using an electro device."""

    def can_assign(self, scheduler: Any) -> bool:
        return scheduler.is_e_device_available()

    def move_to_wait(self, scheduler: Any, patient: Any) -> None:
        scheduler.move_to_e_waiting(patient)

    def return_device(self, scheduler: Any) -> None:
        scheduler.return_e_device(self.resource)
        self.resource = None

    def list_latency(self, scheduler: Any) -> int:
        return scheduler.e_latency()


class UTherapy(Treatment):
    """Ultrasound therapy, using an ultrasound device."""

    def can_assign(self, scheduler: Any) -> bool:
        return scheduler.is_u_device_available()

    def move_to_wait(self, scheduler: Any, patient: Any) -> None:
        scheduler.move_to_u_waiting(patient)

    def return_device(self, scheduler: Any) -> None:
        scheduler.return_u_device(self.resource)
        self.resource = None

    def list_latency(self, scheduler: Any) -> int:
        return scheduler.u_latency()


class XTherapy(Treatment):
    """Exercise therapy, using a place in an exercise room."""

    def can_assign(self, scheduler: Any) -> bool:
        return scheduler.is_x_room_available()

    def move_to_wait(self, scheduler: Any, patient: Any) -> None:
        scheduler.move_to_x_waiting(patient)

    def return_device(self, scheduler: Any) -> None:
        scheduler.return_x_room(self.resource)
        self.resource = None

    def list_latency(self, scheduler: Any) -> int:
        return scheduler.x_latency()


_BY_CODE = {"E": ETherapy, "U": UTherapy, "X": XTherapy}


def treatment_from_code(code: str, duration: int) -> Treatment:
    """Build a treatment from its letter (E, U or X, any case)."""
    try:
        cls = _BY_CODE[code.upper()]
    except KeyError:
        raise ValueError(f"unknown treatment code: {code!r}") from None
    return cls(duration)