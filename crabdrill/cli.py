"""Command line entry point: listing, running, verifying and watching exercises."""

from __future__ import annotations

import argparse
import errno
import itertools
import queue
import subprocess
import sys
import threading
from collections.abc import Iterable, Sequence
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from crabdrill.exercise import Exercise, load_exercises
from crabdrill.project import RustAnalyzerProject
from crabdrill.run import reset, run
from crabdrill.verify import VerificationFailed, verify

__all__ = [
    "WatchStatus",
    "find_exercise",
    "rustc_exists",
    "list_exercises",
    "watch",
    "main",
]

_EXERCISES_DIR = Path("./exercises")
_DEBOUNCE_SECONDS = 0.2
_POLL_SECONDS = 1.0


class WatchStatus(Enum):
    """How a watch session ended."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"


def find_exercise(name: str, exercises: Sequence[Exercise]) -> Exercise:
    """Return the named exercise, or the first pending one for ``next``.

    Raises LookupError with a message for the learner when nothing matches.
    """
    if name == "next":
        found = next((e for e in exercises if not e.looks_done()), None)
        if found is None:
            raise LookupError(
                "🎉 ¡Felicidades! ¡Has completado todos los ejercicios!\n"
                "🔚 ¡No hay más ejercicios por hacer después de este!"
            )
        return found
    found = next((e for e in exercises if e.name == name), None)
    if found is None:
        raise LookupError(f"No se encontró ningún ejercicio para '{name}'!")
    return found


def rustc_exists() -> bool:
    """True when ``rustc --version`` can be started and succeeds."""
    try:
        completed = subprocess.run(
            ["rustc", "--version"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return completed.returncode == 0


def list_exercises(
    exercises: Sequence[Exercise],
    paths: bool = False,
    names: bool = False,
    filter: str | None = None,
    unsolved: bool = False,
    solved: bool = False,
) -> int:
    """Print the exercises and the overall progress; return how many are done."""
    out = sys.stdout
    if not paths and not names:
        out.write(f"{'Nombre':<17}\t{'Ruta':<46}\t{'Estado':<7}\n")
        out.flush()

    patterns = [part for part in (filter or "").lower().split(",") if part.strip()]
    exercises_done = 0
    for exercise in exercises:
        fname = str(exercise.path)
        matches_filter = any(p in exercise.name or p in fname for p in patterns)
        done = exercise.looks_done()
        if done:
            exercises_done += 1
        status = "Hecho" if done else "Pendiente"
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if wanted and (matches_filter or filter is None):
            if paths:
                line = f"{fname}\n"
            elif names:
                line = f"{exercise.name}\n"
            else:
                line = f"{exercise.name:<17}\t{fname:<46}\t{status:<7}\n"
            out.write(line)
            out.flush()

    total = len(exercises)
    percentage = exercises_done / total * 100.0 if total else float("nan")
    out.write(
        f"Progreso: Has completado {exercises_done} / {total} ejercicios "
        f"({percentage:.1f} %).\n"
    )
    out.flush()
    return exercises_done


class _SharedHint:
    """The hint of the exercise that failed last, shared with the shell thread."""

    def __init__(self, text: str | None = None):
        self._lock = threading.Lock()
        self._text = text

    def replace(self, text: str) -> None:
        with self._lock:
            self._text = text

    def current(self) -> str | None:
        with self._lock:
            return self._text


class _ChangeHandler(FileSystemEventHandler):
    """Forwards paths of created or modified files to a queue."""

    def __init__(self, events: queue.Queue[str]):
        super().__init__()
        self._events = events

    def _forward(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            path = event.src_path
            self._events.put(path.decode() if isinstance(path, bytes) else path)

    def on_created(self, event: FileSystemEvent) -> None:
        self._forward(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._forward(event)


def _clear_screen() -> None:
    print("\x1bc")


def _print_shell_help() -> None:
    print("Comandos disponibles en el modo de observación:")
    print("  hint   - imprime la pista del ejercicio actual")
    print("  clear  - limpia la pantalla")
    print("  quit   - sale del modo de observación")
    print("  !<cmd> - ejecuta un comando, como `!rustc --explain E0381`")
    print("  help   - muestra este mensaje de ayuda")
    print()
    print("El modo de observación reevalúa automáticamente el ejercicio actual")
    print("cuando editas el contenido de un archivo.")


def _run_shell_command(command: str) -> None:
    parts = command.split()
    if not parts:
        print("No se proporcionó ningún comando")
        return
    try:
        subprocess.run(parts, check=False)
    except OSError as error:
        print(f"Falló al ejecutar el comando `{command}`: {error}")


def _watch_shell(hint: _SharedHint, should_quit: threading.Event) -> None:
    while True:
        try:
            raw = sys.stdin.readline()
        except (OSError, ValueError) as error:
            print(f"Error leyendo el comando: {error}")
            return
        if raw == "":
            return
        command = raw.strip()
        if command == "hint":
            text = hint.current()
            if text is not None:
                print(text)
        elif command == "clear":
            print("\x1b[2J\x1b[1;1H")
        elif command == "quit":
            should_quit.set()
            print("¡Adiós!")
        elif command == "help":
            _print_shell_help()
        elif command.startswith("!"):
            _run_shell_command(command[1:])
        else:
            print(f"unknown command: {command}")


def _spawn_watch_shell(hint: _SharedHint, should_quit: threading.Event) -> None:
    print(
        "Bienvenid@ al modo de observación! Puedes escribir 'help' para obtener "
        "una descripción general de los comandos que puedes usar aquí."
    )
    threading.Thread(target=_watch_shell, args=(hint, should_quit), daemon=True).start()


def _ends_with(path: Path, suffix: Path) -> bool:
    tail = suffix.parts
    return bool(tail) and path.parts[-len(tail):] == tail


def _next_changes(events: queue.Queue[str]) -> list[str]:
    """Wait for a change, then gather the burst that follows it."""
    try:
        collected = [events.get(timeout=_POLL_SECONDS)]
    except queue.Empty:
        return []
    while True:
        try:
            collected.append(events.get(timeout=_DEBOUNCE_SECONDS))
        except queue.Empty:
            break
    return list(dict.fromkeys(collected))


def _pending_after_change(filepath: Path, exercises: Sequence[Exercise]) -> Iterable[Exercise]:
    current = next((e for e in exercises if _ends_with(filepath, e.path)), None)
    rest = (
        e for e in exercises if not e.looks_done() and not _ends_with(filepath, e.path)
    )
    return itertools.chain([current] if current is not None else [], rest)


def _watch_loop(
    exercises: Sequence[Exercise],
    events: queue.Queue[str],
    verbose: bool,
    success_hints: bool,
) -> WatchStatus:
    _clear_screen()
    try:
        verify(exercises, (0, len(exercises)), verbose, success_hints)
    except VerificationFailed as failure:
        hint = _SharedHint(failure.exercise.hint)
    else:
        return WatchStatus.FINISHED

    should_quit = threading.Event()
    _spawn_watch_shell(hint, should_quit)
    while True:
        for changed in _next_changes(events):
            path = Path(changed)
            if path.suffix != ".rs" or not path.exists():
                continue
            filepath = path.resolve()
            pending = _pending_after_change(filepath, exercises)
            num_done = sum(1 for e in exercises if e.looks_done())
            _clear_screen()
            try:
                verify(pending, (num_done, len(exercises)), verbose, success_hints)
            except VerificationFailed as failure:
                hint.replace(failure.exercise.hint)
            else:
                return WatchStatus.FINISHED
        if should_quit.is_set():
            return WatchStatus.UNFINISHED


def watch(
    exercises: Sequence[Exercise], verbose: bool = False, success_hints: bool = False
) -> WatchStatus:
    """Verify the exercises and verify again whenever an exercise file changes.

    Raises OSError when the exercises directory cannot be watched.
    """
    exercises = list(exercises)
    if not _EXERCISES_DIR.is_dir():
        raise FileNotFoundError(errno.ENOENT, "No such directory", str(_EXERCISES_DIR))
    events: queue.Queue[str] = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeHandler(events), str(_EXERCISES_DIR), recursive=True)
    observer.start()
    try:
        return _watch_loop(exercises, events, verbose, success_hints)
    finally:
        observer.stop()
        observer.join()


def _package_version() -> str:
    try:
        return version("crabdrill")
    except PackageNotFoundError:
        return "0.0.0"


def _emoji(symbol: str, fallback: str) -> str:
    encoding = getattr(sys.stdout, "encoding", None) or "ascii"
    try:
        symbol.encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return fallback
    return symbol


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crabdrill",
        description=(
            "crabdrill is a collection of small exercises to get you used to "
            "writing and reading Rust code"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument(
        "--nocapture", action="store_true", help="Show outputs from the test exercises"
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.add_parser("verify", help="Verify all exercises according to the recommended order")
    watch_parser = commands.add_parser("watch", help="Rerun `verify` when files were edited")
    watch_parser.add_argument("--success-hints", action="store_true", help="Show hints on success")
    for name, description in (
        ("run", "Run/Test a single exercise"),
        ("reset", 'Reset a single exercise using "git stash -- <filename>"'),
        ("hint", "Return a hint for the given exercise"),
    ):
        sub = commands.add_parser(name, help=description)
        sub.add_argument("name", help="The name of the exercise")
    list_parser = commands.add_parser("list", help="List the exercises available")
    list_parser.add_argument("-p", "--paths", action="store_true",
                             help="Show only the paths of the exercises")
    list_parser.add_argument("-n", "--names", action="store_true",
                             help="Show only the names of the exercises")
    list_parser.add_argument("-f", "--filter", default=None,
                             help="Comma separated patterns to match exercise names")
    list_parser.add_argument("-u", "--unsolved", action="store_true",
                             help="Display only exercises not yet solved")
    list_parser.add_argument("-s", "--solved", action="store_true",
                             help="Display only exercises that have been solved")
    commands.add_parser("lsp", help="Enable rust-analyzer for exercises")
    return parser


def _generate_lsp_project() -> int:
    project = RustAnalyzerProject()
    try:
        project.get_sysroot_src()
    except OSError as error:
        print(
            "No se pudo encontrar la ruta de las herramientas, "
            f"¿tiene `rustc` instalado? {error}",
            file=sys.stderr,
        )
        return 1
    try:
        project.exercises_to_json()
    except OSError as error:
        print(
            f"No se pudieron analizar los archivos de ejercicios: {error}",
            file=sys.stderr,
        )
        return 1

    if not project.crates:
        print("Falló al encontrar ejercicios, asegúrese de estar en la carpeta `crabdrill`")
        return 0
    try:
        project.write_to_disk()
    except OSError:
        print("Falló al escribir rust-project.json en el disco para rust-analyzer")
        return 0
    print("Generado con éxito rust-project.json")
    print(
        "rust-analyzer ahora analizará los ejercicios, "
        "reinicie su servidor de lenguaje o editor"
    )
    return 0


def _watch_command(exercises: Sequence[Exercise], verbose: bool, success_hints: bool) -> int:
    try:
        status = watch(exercises, verbose, success_hints)
    except OSError as error:
        print(f"Error: No se pudo observar su progreso. El mensaje de error fue {error!r}.")
        print(
            "Lo más probable es que se haya quedado sin espacio en disco "
            "o se haya alcanzado su 'límite de inotify'."
        )
        return 1
    if status is WatchStatus.FINISHED:
        emoji = _emoji("🎉", "★")
        print(f"{emoji} ¡Todos los ejercicios completados! {emoji}")
        print(f"\n{FENISH_LINE}\n")
    else:
        print("Esperamos que estés disfrutando aprendiendo sobre Rust!")
        print(
            "Si quieres continuar trabajando en los ejercicios en otro momento, "
            "simplemente ejecuta `crabdrill watch` de nuevo"
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool and return its exit status."""
    args = _build_parser().parse_args(argv)

    if args.command is None:
        print(f"\n{WELCOME}\n")

    if not Path("info.toml").exists():
        print(f"{sys.argv[0]} debe ejecutarse desde el directorio crabdrill")
        print("Intente `cd crabdrill/`!")
        return 1

    if not rustc_exists():
        print("No podemos encontrar `rustc`.")
        print("Intente ejecutar `rustc --version` para diagnosticar su problema.")
        print("Para obtener instrucciones sobre cómo instalar Rust, consulte el README.")
        return 1

    exercises = load_exercises("info.toml")
    verbose = args.nocapture

    if args.command is None:
        print(f"{DEFAULT_OUT}\n")
        return 0

    match args.command:
        case "list":
            try:
                list_exercises(
                    exercises, args.paths, args.names, args.filter, args.unsolved, args.solved
                )
            except BrokenPipeError:
                return 0
            except OSError:
                return 1
            return 0
        case "run" | "reset" | "hint":
            try:
                exercise = find_exercise(args.name, exercises)
            except LookupError as error:
                print(error)
                return 1
            if args.command == "hint":
                print(exercise.hint)
                return 0
            try:
                if args.command == "run":
                    run(exercise, verbose)
                else:
                    reset(exercise)
            except (VerificationFailed, OSError):
                return 1
            return 0
        case "verify":
            try:
                verify(exercises, (0, len(exercises)), verbose, False)
            except VerificationFailed:
                return 1
            return 0
        case "lsp":
            return _generate_lsp_project()
        case "watch":
            return _watch_command(exercises, verbose, args.success_hints)
    return 1


DEFAULT_OUT = """¡Gracias por instalar crabdrill!

¿Es la primera vez que lo usas? ¡No te preocupes, crabdrill fue creado para
principiantes! Vamos a enseñarte muchas cosas sobre Rust, pero antes de que
podamos empezar, aquí tienes algunas notas sobre cómo opera crabdrill:

1. El concepto central detrás de crabdrill es que resuelvas ejercicios. Estos
   ejercicios suelen tener algún tipo de error de sintaxis en ellos, lo que
   causará que fallen en la compilación o en las pruebas. A veces, en lugar de
   un error de sintaxis, hay un error lógico. Sin importar el tipo de error, tu
   trabajo es encontrarlo y corregirlo. Sabrás cuando lo hayas corregido porque
   entonces el ejercicio se compilará y crabdrill podrá pasar al siguiente
   ejercicio.
2. Si ejecutas crabdrill en modo de observación (que recomendamos), comenzará
   automáticamente con el primer ejercicio. ¡No te confundas si ves un mensaje
   de error apareciendo tan pronto como ejecutes crabdrill! Esto es parte del
   ejercicio que debes resolver, así que abre el archivo del ejercicio en un
   editor y comienza tu trabajo de detective.
3. Si te quedas atascado en un ejercicio, hay una pista útil que puedes ver
   escribiendo 'hint' (en modo de observación) o ejecutando
   `crabdrill hint nombre_del_ejercicio`.
4. Si un ejercicio no tiene sentido para ti, ¡siéntete libre de abrir un problema
   en el repositorio del proyecto! Revisamos cada problema y a veces, otros
   aprendices también lo hacen, ¡así que pueden ayudarse mutuamente!
5. Si deseas utilizar `rust-analyzer` con los ejercicios, que proporciona
   características como el autocompletado, ejecuta el comando `crabdrill lsp`.

¿Lo tienes todo claro? ¡Genial! Para empezar, ejecuta `crabdrill watch` para
obtener el primer ejercicio. ¡Asegúrate de tener tu editor abierto!"""

FENISH_LINE = r"""+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
|          You made it to the Fe-nish line!          |
| Lo hiciste, ¡te sumergiste en crabdrill y ganaste! |
+--------------------------  ------------------------+
                          \\/
     ▒▒          ▒▒▒▒▒▒▒▒      ▒▒▒▒▒▒▒▒          ▒▒
   ▒▒▒▒  ▒▒    ▒▒        ▒▒  ▒▒        ▒▒    ▒▒  ▒▒▒▒
   ▒▒▒▒  ▒▒  ▒▒            ▒▒            ▒▒  ▒▒  ▒▒▒▒
 ░░▒▒▒▒░░▒▒  ▒▒            ▒▒            ▒▒  ▒▒░░▒▒▒▒
   ▓▓▓▓▓▓▓▓  ▓▓      ▓▓██  ▓▓  ▓▓██      ▓▓  ▓▓▓▓▓▓▓▓
     ▒▒▒▒    ▒▒      ████  ▒▒  ████      ▒▒░░  ▒▒▒▒
       ▒▒  ▒▒▒▒▒▒        ▒▒▒▒▒▒        ▒▒▒▒▒▒  ▒▒
         ▒▒▒▒▒▒▒▒▒▒▓▓▓▓▓▓▒▒▒▒▒▒▒▒▓▓▒▒▓▓▒▒▒▒▒▒▒▒
           ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒
             ▒▒▒▒▒▒▒▒▒▒██▒▒▒▒▒▒██▒▒▒▒▒▒▒▒▒▒
           ▒▒  ▒▒▒▒▒▒▒▒▒▒██████▒▒▒▒▒▒▒▒▒▒  ▒▒
         ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒
       ▒▒    ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒    ▒▒
       ▒▒  ▒▒    ▒▒                  ▒▒    ▒▒  ▒▒
           ▒▒  ▒▒                      ▒▒  ▒▒

¡Esperamos que hayas disfrutado aprendiendo sobre los diversos aspectos de Rust!
Si notaste algún problema, no dudes en informarlo en nuestro repositorio.
¡También puedes contribuir con tus propios ejercicios para ayudar a la comunidad en general!

Antes de informar un problema o contribuir, por favor, lee la guía de
contribución que acompaña al repositorio."""

WELCOME = r"""       Bienvenid@ a...
  +-------------------------------+
  |    c r a b d r i l l          |
  +-------------------------------+"""