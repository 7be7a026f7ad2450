# utils/crashlog.py
import os, sys, faulthandler, datetime, traceback, threading

_fault_file = None
_log_root = None

def default_log_dir() -> str:
    """logs/ beside the PyInstaller bundle, or under the working directory."""
    bundle = getattr(sys, "_MEIPASS", None)
    base = os.path.dirname(bundle) if bundle else os.getcwd()
    return os.path.join(base, "logs")

def configure(path=None) -> str:
    """Pick the folder for app.log and the crash/error reports (None = default)."""
    global _log_root
    _log_root = os.path.abspath(path) if path else None
    return log_dir()

def log_dir() -> str:
    d = _log_root or default_log_dir()
    os.makedirs(d, exist_ok=True)
    return d

def _new_log_path(prefix: str) -> str:
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    return os.path.join(log_dir(), f"{prefix}-{stamp}.txt")

def _write_report(prefix: str, header: str, exc_type, exc, tb) -> str:
    path = _new_log_path(prefix)
    with open(path, "w", encoding="utf-8") as out:
        out.write(header + "\n")
        out.write("=" * 60 + "\n")
        out.write("".join(traceback.format_exception(exc_type, exc, tb)))
    return path

def setup_crashlog():
    """Native faults -> native-*.txt, uncaught exceptions (main and threads) -> crash-*.txt."""
    global _fault_file
    try:
        if _fault_file is None:
            _fault_file = open(_new_log_path("native"), "w", encoding="utf-8")
        faulthandler.enable(_fault_file, all_threads=True)
    except OSError:
        _fault_file = None

    def _hook(exc_type, exc, tb):
        try:
            _write_report("crash", "UNCAUGHT EXCEPTION", exc_type, exc, tb)
        finally:
            sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook
    # 背景執行緒的例外也寫進同一份報告
    threading.excepthook = lambda args: _hook(args.exc_type, args.exc_value, args.exc_traceback)

def log_exception(title: str, exc: BaseException) -> str:
    """Handled-but-unexpected errors: error-*.txt, returns its path."""
    return _write_report("error", f"[{title}] {type(exc).__name__}: {exc}",
                         type(exc), exc, exc.__traceback__)
