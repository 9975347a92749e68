"""Treatment resources: electro devices, ultrasound devices and exercise rooms."""

from __future__ import annotations


class Resource:
    """A resource identified by a kind letter and a number."""

    def __init__(self, kind: str, resource_id: int) -> None:
        self.kind = kind
        self.id = resource_id

    def __str__(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"


class EDevice(Resource):
    """Electro-therapy device."""

    def __init__(self, resource_id: int) -> None:
        super().__init__("E", resource_id)


class UDevice(Resource):
    """Ultrasound-therapy device."""

    def __init__(self, resource_id: int) -> None:
        super().__init__("U", resource_id)


class XRoom(Resource):
    """Exercise room shared by up to ``capacity`` patients."""

    def __init__(self, capacity: int, resource_id: int) -> None:
        super().__init__("X", resource_id)
        self.capacity = capacity
        self.current_patients = 0

    def add_patient(self) -> bool:
        """Admit a patient; return True when the room has just become full."""
        self.current_patients += 1
        return self.current_patients == self.capacity

    def remove_patient(self) -> bool:
        """Release a patient; return True when the room was full before."""
        self.current_patients -= 1
        return self.current_patients == self.capacity - 1

    def __str__(self) -> str:
        return f"R{self.id}[{self.current_patients}, {self.capacity}]"