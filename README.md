# clinisim

A time-step simulation of a physiotherapy clinic. Patients arrive early, late
or on time. Each one needs a list of treatments: electro (E), ultrasound (U)
and exercise-room (X). They wait in a queue for each treatment and are given a
free device or a place in a room. They leave once every treatment is done.
Along the way, a patient waiting for their last exercise treatment may cancel
it, and an early patient may have their appointment moved back by 0 to 20 time
steps. Both happen at random, with set probabilities.

When the run ends, clinisim writes a report. It lists each finished patient,
most recently finished first, with their appointment (PT), arrival (VT),
finish (FT), waiting (WT) and treatment (TT) times and whether they cancelled
or were rescheduled. Overall statistics follow: average waiting and treatment
times, cancellation and rescheduling rates, the share of early and late
patients, and the average late penalty.

## Installing

```
pip install .
```

## Running

```
clinisim [--data-dir DIR]
```

`DIR` defaults to `Data`. The program prompts for:

1. the name of the input file. It is read from `DIR/Input Files/<name>.txt`.
2. the mode. `1` is silent; any other number is interactive. In interactive
   mode every list is printed at each time step, and you press Enter to
   continue.
3. the name of the output file, once the simulation has finished. The report
   is written to `DIR/Output Files/<name>.txt`, and the directory is created
   if needed.

## Input format

Values are separated by whitespace:

```
NE NU NG                 number of E devices, U devices and X rooms
cap1 cap2 ... capNG      capacity of each X room
PCancel PResc            cancellation and rescheduling probabilities (0-100)
N                        number of patients
type PT VT k  t1 d1 ... tk dk    one line per patient
```

The fields on each patient line are:

- `type` is `N` or `R`. Normal (`N`) patients take their treatments in the
  given order. Recovering (`R`) patients are sent, whenever they move on, to
  the treatment whose waiting list has the least treatment time queued.
- `PT` is the appointment time and `VT` the arrival time. A patient who
  arrives late is held back for half the delay (the penalty).
- `k` is the number of treatments. Each is given as a code (`E`, `U` or `X`,
  in either case) followed by a duration. Any other code raises `ValueError`.

## Using it as a library

```python
import io
import random
from clinisim.scheduler import Scheduler

data = io.StringIO("1 1 1\n2\n0 0\n1\nN 1 1 1 E 3\n")
sched = Scheduler(rng=random.Random(0), interactive=False)
sched.load(data)
sched.run()

report = io.StringIO()
sched.write_report(report)
print(report.getvalue())
```

`Scheduler.step()` advances the clock by one step, and `Scheduler.run()` steps
until every patient has finished. The lists (`all_patients`, `early_patients`,
`late_patients`, `e_waitlist`, `u_waitlist`, `x_waitlist`, `in_treatment`,
`finished`) and the free resources (`e_devices`, `u_devices`, `x_rooms`) are
attributes of the scheduler. `clinisim.ui.ConsoleUI` holds the prompts and the
per-step display, and it can be given any text streams for input and output.

The modules are:

- `clinisim.containers`: `LinkedQueue`, `PriQueue` and `ArrayStack`.
- `clinisim.resources`: `EDevice`, `UDevice` and `XRoom`.
- `clinisim.treatments`: `ETherapy`, `UTherapy`, `XTherapy` and
  `treatment_from_code`.
- `clinisim.patient`: `Patient` and `PatientState`.
- `clinisim.waitlists`: `EUWaitList`, `XWaitList` and `EarlyPList`.
- `clinisim.ui`: `ConsoleUI`.
- `clinisim.scheduler`: `Scheduler` and `main`.

## Limits

- Finished patients are kept on a stack of capacity 200. A scenario in which
  more than 200 patients finish raises `IndexError`.
- The scenario is read only from a file or a text stream. There is no
  graphical display and no stored history between runs.

## Tests

```
pip install .[test]
pytest
```