"""The clinic scheduler: loads a scenario, runs the simulation, writes a report."""

from __future__ import annotations

import argparse
import random
import re
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from clinisim.containers import ArrayStack, LinkedQueue, PriQueue
from clinisim.patient import Patient, PatientState
from clinisim.resources import EDevice, Resource, UDevice, XRoom
from clinisim.treatments import treatment_from_code
from clinisim.ui import ConsoleUI
from clinisim.waitlists import EarlyPList, EUWaitList, XWaitList

_INT = re.compile(r"[+-]?\d+")

REPORT_HEADER = "PID\tPType\tPT\tVT\tFT\tWT\tTT\tCancel\tResc\n"


class _Reader:
    """Reads single characters and integers from whitespace-separated text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _skip_space(self) -> None:
        text = self._text
        while self._pos < len(text) and text[self._pos].isspace():
            self._pos += 1

    def char(self) -> str:
        self._skip_space()
        if self._pos >= len(self._text):
            raise ValueError("unexpected end of input")
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def integer(self) -> int:
        self._skip_space()
        match = _INT.match(self._text, self._pos)
        if match is None:
            if self._pos >= len(self._text):
                raise ValueError("unexpected end of input")
            raise ValueError(f"expected an integer at offset {self._pos}")
        self._pos = match.end()
        return int(match.group())


def _is_normal(kind: str) -> bool:
    return kind in ("N", "n")


def _is_recovering(kind: str) -> bool:
    return kind in ("R", "r")


def _ratio(numerator: float, denominator: int) -> str:
    if denominator == 0:
        return "0"
    return format(numerator / denominator, ".6g")


class Scheduler:
    """Moves patients between the clinic's lists, one time step at a time."""

    def __init__(
        self,
        ui: Optional[ConsoleUI] = None,
        rng: Optional[random.Random] = None,
        interactive: bool = False,
    ) -> None:
        self.ui = ui if ui is not None else ConsoleUI()
        self.rng = rng if rng is not None else random.Random()
        self.interactive = interactive

        self.current_time = 0
        self.e_waitlist = EUWaitList()
        self.u_waitlist = EUWaitList()
        self.x_waitlist = XWaitList()
        self.e_devices: LinkedQueue[Resource] = LinkedQueue()
        self.u_devices: LinkedQueue[Resource] = LinkedQueue()
        self.x_rooms: LinkedQueue[Resource] = LinkedQueue()
        self.all_patients: LinkedQueue[Patient] = LinkedQueue()
        self.finished: ArrayStack[Patient] = ArrayStack()
        self.early_patients = EarlyPList()
        self.late_patients: PriQueue[Patient] = PriQueue()
        self.in_treatment: PriQueue[Patient] = PriQueue()

        self.num_patients = 0
        self.normal_count = 0
        self.recovering_count = 0
        self.early_count = 0
        self.late_count = 0
        self.total_waiting_normal = 0
        self.total_waiting_recovering = 0
        self.total_treatment_normal = 0
        self.total_treatment_recovering = 0
        self.total_penalties = 0
        self.cancel_count = 0
        self.reschedule_count = 0
        self.cancel_probability = 0
        self.reschedule_probability = 0

    # ----- loading -------------------------------------------------------

    def load(self, stream: TextIO) -> None:
        """Read resources, probabilities and patients from a scenario file."""
        reader = _Reader(stream.read())
        e_count = reader.integer()
        u_count = reader.integer()
        room_count = reader.integer()
        for number in range(1, e_count + 1):
            self.e_devices.enqueue(EDevice(number))
        for number in range(1, u_count + 1):
            self.u_devices.enqueue(UDevice(number))
        for number in range(1, room_count + 1):
            self.x_rooms.enqueue(XRoom(reader.integer(), number))
        self.cancel_probability = reader.integer()
        self.reschedule_probability = reader.integer()
        count = reader.integer()
        for _ in range(count):
            kind = reader.char()
            pt = reader.integer()
            vt = reader.integer()
            treatment_count = reader.integer()
            treatments = []
            for _ in range(treatment_count):
                code = reader.char()
                treatments.append(treatment_from_code(code, reader.integer()))
            self.num_patients += 1
            self.all_patients.enqueue(
                Patient(pt, vt, treatments, kind, self.num_patients)
            )

    # ----- list moves ----------------------------------------------------

    @staticmethod
    def _move_to_waitlist(waitlist: EUWaitList, patient: Patient) -> None:
        if patient.state is PatientState.NOT_ARRIVED:
            waitlist.enqueue(patient)
        else:
            waitlist.insert_sorted(patient)
        patient.state = PatientState.WAITING

    def move_to_e_waiting(self, patient: Patient) -> None:
        """Put a patient on the electro-therapy waiting list."""
        self._move_to_waitlist(self.e_waitlist, patient)

    def move_to_u_waiting(self, patient: Patient) -> None:
        """Put a patient on the ultrasound-therapy waiting list."""
        self._move_to_waitlist(self.u_waitlist, patient)

    def move_to_x_waiting(self, patient: Patient) -> None:
        """Put a patient on the exercise-room waiting list."""
        self._move_to_waitlist(self.x_waitlist, patient)

    def move_to_early(self, patient: Patient) -> None:
        """Hold a patient who came before the appointment."""
        patient.state = PatientState.EARLY
        self.early_patients.enqueue(patient, -patient.pt)

    def move_to_late(self, patient: Patient) -> None:
        """Hold a patient who came after the appointment."""
        patient.state = PatientState.LATE
        self.late_patients.enqueue(patient, -(patient.pt + patient.penalty))

    def move_to_in_treatment(self, patient: Patient) -> None:
        """Start the patient's next treatment now."""
        patient.state = PatientState.IN_TREATMENT
        self.in_treatment.enqueue(
            patient, -(patient.treatment_duration() + self.current_time)
        )

    def move_to_finished(self, patient: Patient) -> None:
        """Mark a patient as done."""
        patient.state = PatientState.FINISHED
        self.finished.push(patient)

    # ----- resources -----------------------------------------------------

    def take_e_device(self) -> Resource:
        """Remove and return a free electro device."""
        return self.e_devices.dequeue()

    def take_u_device(self) -> Resource:
        """Remove and return a free ultrasound device."""
        return self.u_devices.dequeue()

    def take_x_room(self) -> Resource:
        """Take a place in the first free room; a full room leaves the free list."""
        room = self.x_rooms.peek()
        if room.add_patient():
            self.x_rooms.dequeue()
        return room

    def return_e_device(self, resource: Resource) -> None:
        """Give an electro device back."""
        self.e_devices.enqueue(resource)

    def return_u_device(self, resource: Resource) -> None:
        """Give an ultrasound device back."""
        self.u_devices.enqueue(resource)

    def return_x_room(self, resource: Resource) -> None:
        """Free a place in a room; a room that was full becomes free again."""
        if resource.remove_patient():
            self.x_rooms.enqueue(resource)

    def is_e_device_available(self) -> bool:
        return len(self.e_devices) != 0

    def is_u_device_available(self) -> bool:
        return len(self.u_devices) != 0

    def is_x_room_available(self) -> bool:
        return len(self.x_rooms) != 0

    def e_latency(self) -> int:
        return self.e_waitlist.treatment_latency()

    def u_latency(self) -> int:
        return self.u_waitlist.treatment_latency()

    def x_latency(self) -> int:
        return self.x_waitlist.treatment_latency()

    # ----- simulation ----------------------------------------------------

    def _unfinished(self) -> bool:
        return len(self.finished) < self.num_patients

    def _send_to_next_treatment(self, patient: Patient) -> None:
        patient.rearrange_treatments(self)
        patient.next_treatment().move_to_wait(self, patient)

    def _finish(self, patient: Patient) -> None:
        self.move_to_finished(patient)
        if _is_normal(patient.kind):
            patient.ft = self.current_time
            self.total_waiting_normal += patient.total_waiting_time()
            self.total_treatment_normal += patient.tt
        elif _is_recovering(patient.kind):
            patient.ft = self.current_time
            self.total_waiting_recovering += patient.total_waiting_time()
            self.total_treatment_recovering += patient.tt

    def _admit_arrivals(self) -> None:
        queue = self.all_patients
        while queue and queue.peek().check(self.current_time, self):
            patient = queue.peek()
            if _is_normal(patient.kind):
                self.normal_count += 1
            elif _is_recovering(patient.kind):
                self.recovering_count += 1
            queue.dequeue()
            if patient.vt > patient.pt:
                self.move_to_late(patient)
                self.total_penalties += patient.penalty
                self.late_count += 1
            elif patient.vt < patient.pt:
                self.move_to_early(patient)
                self.early_count += 1
            else:
                self._send_to_next_treatment(patient)

    def _release(self, queue: PriQueue[Patient]) -> None:
        while queue and queue.peek()[0].check(self.current_time, self):
            patient, _ = queue.dequeue()
            self._send_to_next_treatment(patient)

    def _finish_treatments(self) -> None:
        queue = self.in_treatment
        while queue and queue.peek()[0].check(self.current_time, self):
            patient, _ = queue.dequeue()
            treatment = patient.finish_treatment()
            patient.add_treatment_time(treatment.duration)
            treatment.return_device(self)
            patient.rearrange_treatments(self)
            following = patient.next_treatment()
            if following is not None:
                following.move_to_wait(self, patient)
            else:
                self._finish(patient)

    def _assign(self, waitlist: EUWaitList, take: Callable[[], Resource]) -> None:
        while waitlist and waitlist.peek().check(self.current_time, self):
            patient = waitlist.dequeue()
            treatment = patient.next_treatment()
            self.move_to_in_treatment(patient)
            treatment.assign(take(), self.current_time)

    def step(self) -> None:
        """Advance the clock by one step and move every patient that is ready."""
        if self._unfinished():
            self.current_time += 1
        self._admit_arrivals()
        self._release(self.early_patients)
        self._release(self.late_patients)
        self._finish_treatments()
        self._assign(self.e_waitlist, self.take_e_device)
        self._assign(self.u_waitlist, self.take_u_device)
        self._assign(self.x_waitlist, self.take_x_room)

        cancelled = self.x_waitlist.cancel(self.cancel_probability, self.rng)
        if cancelled is not None:
            self.cancel_count += 1
            self._finish(cancelled)
        if self.early_patients.reschedule(self.reschedule_probability, self.rng):
            self.reschedule_count += 1

        if self.interactive:
            self.ui.print_details(self)

    def run(self) -> None:
        """Step until every patient has finished."""
        while self._unfinished():
            self.step()

    # ----- report --------------------------------------------------------

    def write_report(self, stream: TextIO) -> None:
        """Write per-patient results and summary statistics."""
        stream.write(REPORT_HEADER)
        for p in self.finished:
            stream.write(
                f"{'P' + str(p.id):<3}\t"
                f"{p.kind:<5}\t"
                f"{p.pt:<2}\t"
                f"{p.vt:<2}\t"
                f"{p.ft:<2}\t"
                f"{p.total_waiting_time():<2}\t"
                f"{p.tt:<2}\t"
                f"{'T' if p.canceled else 'F':<5}\t"
                f"{'T' if p.rescheduled else 'F':<5}\n"
            )
        total = self.num_patients
        normal = self.normal_count
        recovering = self.recovering_count
        waiting_all = self.total_waiting_normal + self.total_waiting_recovering
        treatment_all = self.total_treatment_normal + self.total_treatment_recovering
        stream.write(f"\nTotal number of timesteps = {self.current_time}\n")
        stream.write(
            "Total number of all, N, and R patients = "
            f"{total}, {normal}, {recovering}\n"
        )
        stream.write(
            "Average total waiting time for all, N, and R patients = "
            f"{_ratio(waiting_all, total)}, "
            f"{_ratio(self.total_waiting_normal, normal)}, "
            f"{_ratio(self.total_waiting_recovering, recovering)}\n"
        )
        stream.write(
            "Average total treatment time for all, N, and R patients = "
            f"{_ratio(treatment_all, total)}, "
            f"{_ratio(self.total_treatment_normal, normal)}, "
            f"{_ratio(self.total_treatment_recovering, recovering)}\n"
        )
        stream.write(
            "Percentage of patients of an accepted cancellation (%) = "
            f"{_ratio(100 * self.cancel_count, total)} %\n"
        )
        stream.write(
            "Percentage of patients of an accepted rescheduling (%) = "
            f"{_ratio(100 * self.reschedule_count, total)} %\n"
        )
        stream.write(
            "Percentage of early patients (%) = "
            f"{_ratio(100 * self.early_count, total)} %\n"
        )
        stream.write(
            "Percentage of late patients (%) = "
            f"{_ratio(100 * self.late_count, total)} %\n"
        )
        stream.write(
            "Average late penalty = "
            f"{_ratio(self.total_penalties, self.late_count)} timestep(s)\n"
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Ask for the files and mode, run the simulation and write the report."""
    parser = argparse.ArgumentParser(description="Simulate a physiotherapy clinic.")
    parser.add_argument(
        "--data-dir",
        default="Data",
        help="directory holding 'Input Files' and 'Output Files'",
    )
    args = parser.parse_args(argv)
    data_dir = Path(args.data_dir)

    ui = ConsoleUI()
    input_name = ui.ask_input_filename()
    interactive = ui.ask_interactive()
    scheduler = Scheduler(ui=ui, interactive=interactive)
    with open(data_dir / "Input Files" / f"{input_name}.txt", encoding="utf-8") as f:
        scheduler.load(f)
    ui.stdout.write("Data Has Been Imported Successfully\n")

    scheduler.run()

    output_name = ui.ask_output_filename()
    output_dir = data_dir / "Output Files"
    output_dir.mkdir(parents=True, exist_ok=True)
    with open(output_dir / f"{output_name}.txt", "w", encoding="utf-8") as f:
        scheduler.write_report(f)
    ui.stdout.write("Data Has Been Exported Successfully\n")
    return 0