import os
import subprocess
from typing import Callable, List, Tuple

from .config import OUTPUT_EPUB, OUTPUT_PDF, PANDOC_BINARY, PANDOC_INSTALL_HINT


def output_target(pdf: bool) -> str:
    return OUTPUT_PDF if pdf else OUTPUT_EPUB


def conversion_args(md_path: str, pdf: bool) -> List[str]:
    if pdf:
        return [md_path, "-o", OUTPUT_PDF]
    return [md_path, "-f", "markdown+smart", "--epub-chapter-level", "2", "-o", OUTPUT_EPUB]


def convert_document(md_path: str, pdf: bool, log_fn: Callable[[str], None] = print) -> Tuple[bool, str]:
    cmd = [PANDOC_BINARY] + conversion_args(os.path.basename(md_path), pdf)
    log_fn("Attempting to convert Markdown file...")
    try:
        creationflags = 0
        if os.name == "nt":
            # Suppress console window on Windows
            creationflags = subprocess.CREATE_NO_WINDOW
        proc = subprocess.run(
            cmd,
            cwd=os.path.dirname(os.path.abspath(md_path)),
            capture_output=True,
            check=False,
            encoding="utf-8",
            errors="replace",
            creationflags=creationflags,
        )
    except FileNotFoundError:
        return False, f"{PANDOC_BINARY} not found on system PATH."

    output = (proc.stdout or "") + "\n" + (proc.stderr or "")
    if proc.returncode != 0:
        tail = "\n".join(output.splitlines()[-12:])
        log_fn(f"{PANDOC_BINARY} returned {proc.returncode}; tail of log:\n{tail}")
        return False, output
    return True, output


def finalize_output(md_path: str, pdf: bool, log_fn: Callable[[str], None] = print) -> bool:
    """Convert the flat file; drop it on success, keep it as the fallback otherwise."""
    success, _ = convert_document(md_path, pdf, log_fn)
    if not success:
        log_fn(PANDOC_INSTALL_HINT)
        return False
    os.remove(md_path)
    log_fn(f"Completed! Saved {output_target(pdf)}")
    return True
