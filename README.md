# crabdrill

crabdrill is a terminal coach for working through a collection of small
Rust exercises. Each exercise is a source file with a compile error, a
failing test or a lint to fix. crabdrill compiles it, runs it, tells you
what went wrong and moves you on to the next one once you are done.

## Requirements

- Python 3.11 or newer
- A Rust toolchain on your `PATH`: `rustc`, plus `cargo` with Clippy for
  the lint exercises
- `git`, if you want to use `reset`

## Installation

```
pip install .
```

## What crabdrill does not include

crabdrill does not ship any exercises. You need a directory of your own
that holds an `info.toml` file and the exercise sources it names.
`info.toml` has an `exercises` list. Each entry has a `name`, a `path`, a
`mode` (`compile`, `test` or `clippy`) and a `hint`.

## Getting started

Run every command from the directory that holds `info.toml`. When
`info.toml` is missing, or `rustc --version` cannot be run, crabdrill
prints a message and exits with status 1.

```
crabdrill
```

With no subcommand, crabdrill prints a welcome and a short guide.

## Commands

```
crabdrill watch                 # verify in order, re-run whenever a file is saved
crabdrill watch --success-hints # also show the hint of each exercise that passes
crabdrill verify                # verify every exercise once, in order
crabdrill run NAME              # compile and run (or test) one exercise
crabdrill run next              # the first exercise that is not done yet
crabdrill hint NAME             # print the hint for one exercise
crabdrill reset NAME            # restore one exercise with `git stash -- <file>`
crabdrill list                  # table of names, paths and status
crabdrill lsp                   # write rust-project.json for rust-analyzer
crabdrill --version
```

Put `--nocapture` before the subcommand to see the output of test
exercises as well:

```
crabdrill --nocapture run NAME
```

`run` and `verify` exit with status 1 when an exercise fails. So does any
command given an exercise name that does not exist.

### Listing exercises

`crabdrill list` takes these options:

- `-p`, `--paths`: print only the paths
- `-n`, `--names`: print only the names
- `-f`, `--filter TEXT`: keep exercises whose name or path contains one of
  the comma-separated patterns
- `-u`, `--unsolved`: keep only exercises that are not done
- `-s`, `--solved`: keep only exercises that are done

After the list, crabdrill prints how many exercises you have completed
and what share of the total that is.

### Watch mode

`crabdrill watch` verifies the exercises in order and stops at the first
one that fails. When a `.rs` file under `./exercises` is created or
changed, it checks that exercise first and then the other pending ones.
In watch mode you can type:

- `hint`: show the hint for the exercise that failed last
- `clear`: clear the screen
- `quit`: leave watch mode
- `!<cmd>`: run a command, for example `!rustc --explain E0381`
- `help`: list these commands

### rust-analyzer support

`crabdrill lsp` writes `rust-project.json` in the current directory. It
holds one crate for each `.rs` file under `./exercises`.

## Marking an exercise as done

An exercise counts as done when its source no longer holds the
`// I AM NOT DONE` comment. `list` and `run next` look only at that
comment. `verify` and `watch` also need the exercise to build and pass.
While the comment is still there, they show the lines around it and stop
until you delete it.

## Environment

- `NO_EMOJI`: set to any value to use plain symbols instead of emoji in
  status lines and success messages.
- `RUST_SRC_PATH`: the standard library sources that `crabdrill lsp`
  points rust-analyzer at. Without it, crabdrill asks
  `rustc --print sysroot`.

## Reference solutions

`crabdrill.drills` holds worked Python counterparts of several exercise
topics:

- `crabdrill.drills.quizzes`: apple pricing, a string transformer and
  report cards
- `crabdrill.drills.errors`: name tags, token costs and positive non-zero
  integers
- `crabdrill.drills.iterators`: capitalising words, exact division,
  factorials and progress counts
- `crabdrill.drills.hashmaps`: fruit baskets and a football scores table
- `crabdrill.drills.basics`: conditionals, strings, structs, message
  enums, options, lists, `append_bar` and cons lists

## Running the tests

```
pip install ".[test]"
pytest
```