# csopesy

An interactive command-line emulator of a small operating system's process scheduler. It generates processes made of simple instructions (a print line, `declare`, `add`, `sub`, `sleep`, `for`) and runs them on a configurable number of emulated CPU cores, each core served by its own thread. Scheduling is either first-come-first-served (`fcfs`) or round-robin (`rr`). The package also includes a bouncing-text marquee console.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Configuration

The shell reads its configuration file when you give the `initialize` command. Each line holds a key, a single space, and a value. A value wrapped in double quotes has the quotes removed. Lines without a value and unknown keys are skipped.

```
num-cpu 4
scheduler "rr"
quantum-cycles 5
min-ins 1000
max-ins 2000
delay-per-exec 0
```

| Key | Meaning | Default |
|---|---|---|
| `num-cpu` | Number of emulated cores | 128 |
| `scheduler` | `fcfs` or `rr` | empty |
| `quantum-cycles` | Instructions a process runs before round-robin preempts it | 1 |
| `min-ins` | Fewest instructions in a generated process | 1 |
| `max-ins` | Most instructions in a generated process | 100 |
| `delay-per-exec` | Read and stored, see below | 0 |

A malformed integer, or a file that cannot be opened, makes `initialize` report `initialization failed, please try again`.

## The shell

Start it with:

```
csopesy
```

By default it reads `config.txt` from the working directory; `--config PATH` names another file. Input is lower-cased before it is run. The shell ends on `exit` or at end of input.

| Command | Effect |
|---|---|
| `initialize` | Read the configuration file. Every other command except `exit` is refused until this has been done. |
| `scheduler-start` | Start the configured scheduler. It keeps generating a new process about every 10 ms. If it is already running, generation resumes. |
| `scheduler-stop` | Stop generating new processes. Queued and running processes carry on. |
| `screen -s <name>` | Create a named process and a screen for it. This needs the scheduler to be generating processes. |
| `screen -r <name>` | Attach to a screen, show its header and the log of a matching process that is waiting in the ready queue. `quit` or `exit` returns to the main menu. |
| `screen -ls` | Show CPU utilisation and the running and finished processes. |
| `report-util` | Append the same status listing to `csopesy-log.txt`. The shell then still replies `Unknown command: report-util`. |
| `marquee` | Open the marquee console; the shell resumes when it is quit. |
| `clear` | Clear the terminal and redraw the banner. |
| `exit` | Leave the shell. |

The utilisation line shows `100%` when core 0 is busy and `0%` otherwise.

## The marquee console

Run it on its own with:

```
csopesy-marquee
```

The text bounces diagonally around the terminal below the banner. Type a command and press Enter:

- `speed <ms>`: set the delay between moves. The value must be positive.
- `text <message>`: replace the bouncing text.
- `pollrate <ms>`: set the keyboard polling interval, from 1 to 1000.
- `clear`: clear the terminal and redraw the banner.
- `quit`: leave.

## Using it as a library

```python
import random

from csopesy.config import parse_config
from csopesy.process import Machine
from csopesy.scheduler import Scheduler

config = parse_config('num-cpu 2\nscheduler "rr"\nquantum-cycles 3\nmin-ins 5\nmax-ins 10\n')
scheduler = Scheduler(config, Machine(random.Random(0)))
scheduler.create_process("demo")
scheduler.dispatch()
scheduler.step_core(0)
print(scheduler.render_status())
```

The modules:

- `csopesy.config`: `Config`, `parse_config`, `load_config`, `ConfigError`.
- `csopesy.process`: `Process`, `ProcessState`, `Machine` (process generation and instruction execution) and `format_time`.
- `csopesy.scheduler`: `Scheduler` and `Policy`. `dispatch` and `step_core` perform single steps; `start`, `stop_generation` and `shutdown` manage the background threads; `render_status`, `write_report` and `search_log` produce listings.
- `csopesy.screens`: `ScreenManager`, `ProcessScreen`, `ScreenNotFoundError`.
- `csopesy.marquee`: `MarqueeConsole`, `MarqueeState`, `center_lines`.
- `csopesy.cli`: `Shell`, `tokenize`, `render_header`.

## What it does not do

- `delay-per-exec` is read but not applied: every core waits a fixed 10 ms between instructions.
- There is no setting for how often processes are generated; the interval is fixed.
- A process screen shows only its name and creation time, plus a log if the process is waiting in the ready queue; it does not show live progress.
- Nothing is saved between runs except the report appended by `report-util`.