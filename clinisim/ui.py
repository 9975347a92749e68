"""Console interface: prompts and per-step display of the simulation state."""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

_ALL_LIST_LIMIT = 10


class ConsoleUI:
    """Reads answers from ``stdin`` and writes to ``stdout``."""

    def __init__(
        self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _read_token(self) -> str:
        for line in self.stdin:
            words = line.split()
            if words:
                return words[0]
        raise EOFError("no more input")

    def wait_for_user(self, timestep: int) -> None:
        """Prompt and wait for the user to press Enter."""
        self._write("Press Enter to display next timestep")
        self.stdin.readline()

    def print_details(self, scheduler: Any) -> None:
        """Show every list of the scheduler, then wait for the user."""
        s = scheduler
        finished = s.finished.format()
        lines = [
            "",
            f"Current timestep: {s.current_time}",
            "===============  ALL List  =============== ",
            f"{len(s.all_patients)} patients remaining: "
            + s.all_patients.format(_ALL_LIST_LIMIT),
            "===============  Waiting Lists  =============== ",
            f"{len(s.e_waitlist)} E-therapy patients: " + s.e_waitlist.format(),
            f"{len(s.u_waitlist)} U-therapy patients: " + s.u_waitlist.format(),
            f"{len(s.x_waitlist)} X-therapy patients: " + s.x_waitlist.format(),
            "===============  Early List  =============== ",
            f"{len(s.early_patients)} patients: " + s.early_patients.format(),
            "===============  Late List  =============== ",
            f"{len(s.late_patients)} patients: " + s.late_patients.format(),
            "===============  Avail E-devices  =============== ",
            f"{len(s.e_devices)} Elctro device: " + s.e_devices.format(),
            "===============  Avail U-devices  =============== ",
            f"{len(s.u_devices)} Ultra device: " + s.u_devices.format(),
            "===============  Avail X-rooms  =============== ",
            f"{len(s.x_rooms)} rooms: " + s.x_rooms.format(),
            "===============  In-treatment List  =============== ",
            f"{len(s.in_treatment)} ==> " + s.in_treatment.format(),
            "---------------------------------------",
            f"{len(s.finished)} finished patients: "
            + (finished + "\n" if finished else ""),
        ]
        self._write("\n".join(lines) + "\n")
        self.wait_for_user(s.current_time)

    def ask_input_filename(self) -> str:
        """Ask for the name of the input file."""
        self._write("Enter input file name (Please match the file name exactly) : ")
        return self._read_token()

    def ask_output_filename(self) -> str:
        """Ask for the name of the output file."""
        self._write("Enter output file name : ")
        return self._read_token()

    def ask_interactive(self) -> bool:
        """Ask for the mode; any answer other than 1 (silent) means interactive."""
        self._write(
            "Choose the mode you want \n 1)Silent Mode\t\t2)Interactive Mode\t\t: "
        )
        answer = self._read_token()
        try:
            choice = int(answer)
        except ValueError:
            raise ValueError(f"mode must be a number, got {answer!r}") from None
        return choice != 1