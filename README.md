# ostep-demos

Small, self-contained programs that show core operating-system ideas at work:
process creation, lottery scheduling, threads and shared state, locks,
condition variables, semaphores, classic concurrency bugs, UDP messaging and a
persistent stack kept in a memory-mapped file.

Each demo can be run from the command line or used as a library from Python.
The package uses only the standard library.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

| Command | What it shows |
| --- | --- |
| `ostep-cpu <string>` | Prints the string once a second, forever, busy-waiting in between |
| `ostep-mem <value>` | Stores a value and increments it once a second, forever, printing the process id |
| `ostep-threads <loops>` | Two threads incrementing a shared counter without a lock |
| `ostep-io [file]` | Writes `hello world` to a file (by default `file` in the temporary directory) and forces it to disk |
| `ostep-processes {p1,p2,p3,p4} [file] [output]` | Forking, waiting, running `wc` on a file, and redirecting `wc`'s output to a file (default `./p4.output`) |
| `ostep-lottery <seed> <loops>` | Lottery scheduling over jobs holding 50, 100 and 25 tickets |
| `ostep-pstack <item-or-pop> ...` | A stack that persists between runs in the image file `./ps.img` |
| `ostep-udp-server [--port N]` | A UDP server (port 10000 by default) that answers each message with `goodbye world`, forever |
| `ostep-udp-client [--host H] [--port N] [--client-port N]` | Sends `hello world` to the server and prints the reply |
| `ostep-counter <loops>` | Two threads racing on a shared counter, with the expected total |
| `ostep-va` | Identities of a code object, a large heap allocation and a local object |
| `ostep-cas` | A successful and a failing compare-and-swap |
| `ostep-atomicity [--fixed] [--check-delay S] [--clear-delay S]` | An atomicity violation between a check and a use, and its fix with a lock |
| `ostep-deadlock [--timeout S]` | Two threads taking two locks in opposite orders |
| `ostep-ordering [--fixed] [--delay S]` | An order violation, and its fix with a condition variable |
| `ostep-condvars <demo> ...` | Joining with condition variables and bounded-buffer producer/consumer |
| `ostep-semaphores <demo> ...` | Binary semaphores, joining, producer/consumer, reader/writer locks, throttling |
| `ostep-zemaphore [--delay S]` | A semaphore built from a lock and a condition variable |
| `ostep-dining <num_loops> [--avoid-deadlock] [--verbose]` | The dining philosophers |

`ostep-cpu`, `ostep-mem`, `ostep-threads`, `ostep-io`, `ostep-lottery` and
`ostep-counter` print a usage line and exit with status 1 when given the wrong
number of arguments; the other commands report bad arguments through their
option parser. Numeric arguments are read leniently: text that does not start
with a number counts as 0.

### Condition variable demos

`ostep-condvars` takes one of these sub-commands:

- `join`, `join_modular`, `join_spin` with `--delay S`
- `join_no_lock`, `join_no_state_var` with `--delay S` and `--timeout S`; the
  signal is lost, so without a timeout the parent waits forever
- `pc <buffersize> <loops> <consumers>` and `pc_single_cv ...`

### Semaphore demos

`ostep-semaphores` takes one of these sub-commands:

- `binary [--loops N] [--threads N]`
- `join [--delay S]`
- `pc <buffersize> <loops> <consumers>` (at most 10 consumers)
- `rwlock <readloops> <writeloops>`
- `throttle <num_threads> <sem_value> [--delay S]`

### Dining philosophers

Without `--avoid-deadlock` all philosophers pick up their left fork first, and
the run may never finish. With it, the last philosopher takes the right fork
first. `--verbose` prints every step, indented by seat.

### A persistent stack

`ostep-pstack` works on `ps.img` in the current directory, which must already
exist. Its first bytes hold the item count and the rest holds the items; its
size must be a multiple of the integer size. Create it from Python with
`create_image("ps.img")` (one page by default). Pushes that would overflow the
file are ignored, as are pops from an empty stack:

```
ostep-pstack 7 13 47 pop      # prints 47
ostep-pstack pop pop 99       # prints 13 and 7
ostep-pstack pop              # prints 99
```

### UDP

Start the server in one terminal and the client in another:

```
ostep-udp-server
ostep-udp-client
```

## Using the demos from Python

```python
from ostep_demos.pstack import PersistentStack, create_image

create_image("ps.img", 4096)
with PersistentStack("ps.img") as stack:
    stack.push(7)
    stack.push(13)
    print(len(stack))   # 2
    print(stack.pop())  # 13
```

```python
from ostep_demos.lottery import Lottery

lottery = Lottery(seed=1)
for tickets in (50, 100, 25):
    lottery.insert(tickets)
print(lottery.describe())   # List: [25] [100] [50]
print(lottery.pick(30))     # 100
winner, tickets = lottery.draw()
```

```python
from ostep_demos.zemaphore import Zemaphore

done = Zemaphore(0)
# another thread calls done.post() when it finishes
# done.wait() blocks until then
```

Other building blocks:

- `ostep_demos.common`: `get_time`, `spin`
- `ostep_demos.intro`: `count_concurrently`, `write_hello`
- `ostep_demos.processes`: `fork_hello`, `fork_wait`, `fork_exec`, `fork_redirect`
- `ostep_demos.udp`: `udp_open`, `fill_sock_addr`, `udp_write`, `udp_read`,
  `run_client`, `serve_once`
- `ostep_demos.thread_api`: `ThreadArgs`, `create_demo`, `simple_args_demo`,
  `return_args_demo`, `letters_demo`, `racy_counter`
- `ostep_demos.atomic`: `AtomicInt`
- `ostep_demos.bugs`: `ThreadInfo`, `PrThread`, `atomicity_demo`,
  `deadlock_demo`, `ordering_demo`
- `ostep_demos.condvars`: `Synchronizer`, `BoundedBuffer`, `join_demo`,
  `join_spin_demo`, `join_no_state_demo`, `run_producer_consumer`
- `ostep_demos.semaphores`: `SemaphoreBuffer`, `RWLock`, `binary_counter`,
  `join_demo`, `producer_consumer`, `rwlock_demo`, `throttle`
- `ostep_demos.dining`: `Table`, `left`, `right`, `dine`

## Limitations

- The process demos use `fork` and run `wc`, so they need a POSIX system with
  `wc` on the path.
- The UDP server has no shutdown option; it answers messages until stopped.
- Several demos, such as the deadlock, the lost signals and the racy counters,
  are meant to misbehave: that is what they are there to show.