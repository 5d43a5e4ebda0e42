# rvkit

A small, dependency-free toolkit for experimenting with the pieces of a
teaching operating system for 64-bit RISC-V, and a handful of classic
command-line utilities.

## What is in it

- **Virtual memory** (`rvkit.vm`)
  - `PhysicalMemory(npages, base)`: a contiguous range of simulated
    physical pages with `alloc`, `free`, `read`, `write`, `read_word`,
    `write_word` (little-endian 64-bit) and `free_count`.
  - `PageTable(memory)`: a three-level Sv39 page table stored in that
    memory, with `walk`, `walkaddr`, `map_pages`, `kvmmap`, `unmap`,
    `load_first`, `grow`, `shrink`, `free`, `copy_to`, `clear_user`,
    `copy_out`, `copy_in` and `copy_in_str`.
  - Errors are raised as exceptions: `VMPanic` when an invariant is
    broken (remapping, unaligned addresses, freeing a page that was not
    allocated), `OutOfMemory` when no physical page is left, and
    `BadAddress` when a user address is unmapped or not accessible.
- **Address helpers** (`rvkit.riscv`): `pg_round_up`, `pg_round_down`,
  `pa2pte`, `pte2pa`, `pte_flags`, `px`, `make_satp`, plus the
  `PTE_*`, `PGSIZE`, `MAXVA` and status-register bit constants.
- **Constants** (`rvkit.constants`): system limits such as `NPROC`,
  `MAXPATH` and `FSSIZE`, and the `OpenFlag` open-mode flags
  (`RDONLY`, `WRONLY`, `RDWR`, `CREATE`, `TRUNC`).
- **User library pieces**
  - `rvkit.ulib`: `atoi` (leading digits only, no sign, 32-bit wrap)
    and `gets` (one line of at most `maximum - 1` characters from a
    text or binary stream).
  - `rvkit.printf`: `format`, `fprintf` and `printf`, understanding
    `%d`, `%u`, `%x` (each also with `l` and `ll`), `%p`, `%s` and `%%`.
    Hex digits are upper case; `%p` prints `0x` and 16 digits; an
    unknown conversion is printed as is.
  - `rvkit.umalloc.Heap`: a first-fit circular free-list allocator over
    a simulated program break. `malloc` returns a byte offset, `free`
    takes it back and coalesces neighbours, `free_units` reports the
    free total. With `limit_units` set, growth past the limit raises
    `MemoryError`.
- **Shell parser** (`rvkit.sh`): `parse_cmd` turns a command line with
  `|`, `;`, `&`, `<`, `>`, `>>` and parentheses into a tree of
  `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd` and `BackCmd` dataclasses.
  Malformed input, or more than nine arguments to one command, raises
  `ShellSyntaxError`. `bang_message` builds the output of the `!`
  message builtin, showing the word `os` in bold blue.
- **Random numbers** (`rvkit.rand`): the Park–Miller generator as the
  pure function `do_rand(state)` and the iterable class `ParkMiller`.
- **Utilities**: `cat` and `echo` (`rvkit.cat`), `grep` with a matcher
  supporting only `^`, `.`, `*` and `$` (`rvkit.grep`), `wc`
  (`rvkit.wc`), and `kill`, `ln`, `mkdir`, `rm` plus the `ls`-style
  `fmtname` (`rvkit.tools`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command-line tools

```
rvkit-cat [file ...]
rvkit-echo [word ...]
rvkit-grep pattern [file ...]
rvkit-wc [file ...]
rvkit-kill pid ...
rvkit-ln old new
rvkit-mkdir dir ...
rvkit-rm path ...
```

- `rvkit-cat`, `rvkit-grep` and `rvkit-wc` read standard input when no
  file is given, and stop with status 1 at the first file they cannot
  open.
- `rvkit-grep` prints only newline-terminated lines; a last line
  without a newline is never matched.
- `rvkit-wc` prints lines, words and bytes followed by the name.
- `rvkit-kill` sends a kill signal to each process id and ignores
  failures.
- `rvkit-mkdir` and `rvkit-rm` stop at the first path that fails;
  `rvkit-rm` removes files and empty directories.

## Library examples

Matching with the tiny regular-expression engine:

```python
from rvkit.grep import match

match("^ab*c$", "abbbc")   # True
match("x.z", "axyzb")      # True
match("^b", "abc")         # False
```

Formatting with the minimal `printf`:

```python
from rvkit.printf import format

format("%d items, mask %x", 12, 255)   # '12 items, mask FF'
```

Building a user address space (pages made by `grow` are readable and
user-accessible; pass `PTE_W` to make them writable):

```python
from rvkit.riscv import PTE_W
from rvkit.vm import PageTable, PhysicalMemory

memory = PhysicalMemory(64, 0x80000000)
table = PageTable(memory)
size = table.grow(0, 8192, PTE_W)      # two zeroed, writable user pages
table.copy_out(100, b"hello\0")
table.copy_in_str(100, 64)             # b'hello'
table.free(size)
```

Parsing a shell command line:

```python
from rvkit.sh import parse_cmd

tree = parse_cmd("cat < in | grep x > out ; echo done &")
```

Drawing pseudo-random numbers:

```python
from rvkit.rand import ParkMiller

rng = ParkMiller(1)
values = [rng.next() for _ in range(3)]
```

## What it does not do

- There is no interactive shell: `rvkit.sh` parses command lines but
  never runs them.
- There is no `ls` command; only its name formatting, `fmtname`, is
  provided.
- There is no kernel, process table, scheduler or file system. The
  page tables and heap work on simulated memory inside the Python
  process, and nothing builds or reads disk images.