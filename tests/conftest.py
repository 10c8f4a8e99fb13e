import stat
import sys
from pathlib import Path

import pikepdf
import pytest

FAKE_QPDF_SCRIPT = """\
import sys

import pikepdf

password = sys.argv[1].split("=", 1)[1]
assert sys.argv[2] == "--decrypt"
with pikepdf.open(sys.argv[3], password=password) as pdf:
    pdf.save(sys.argv[4])
"""


def create_plain_pdf(filepath: Path):
    """Create a simple, unlocked PDF file for testing."""
    pdf = pikepdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    pdf.save(filepath)


def create_encrypted_pdf(filepath: Path, password: str):
    """Create a password-protected PDF file for testing."""
    pdf = pikepdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    pdf.save(filepath, encryption=pikepdf.Encryption(owner=password, user=password))


@pytest.fixture()
def fake_qpdf(tmp_path):
    """A qpdf stand-in that decrypts with pikepdf and exits non-zero on failure."""
    if sys.platform == "win32":
        pytest.skip("fake qpdf is a POSIX shell script")

    tool_dir = tmp_path / "tool"
    tool_dir.mkdir()
    script = tool_dir / "fake_qpdf.py"
    script.write_text(FAKE_QPDF_SCRIPT)

    wrapper = tool_dir / "qpdf"
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n')
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    """Run in an empty working directory with none of the PDF_* variables set."""
    for name in ("PDF_PASSWORD", "PDF_SRC_DIR", "PDF_OUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
