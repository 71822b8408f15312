"""Shared fixtures: build jars and WARs on the fly."""

import io
import zipfile

import pytest


def _zip_bytes(files):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buf.getvalue()


def classes(prefix, count, size=10):
    """{'<prefix>/C0.class': b'x'*size, ...}"""
    return {f"{prefix}/C{i}.class": b"x" * size for i in range(count)}


@pytest.fixture
def make_jar(tmp_path):
    """Write a jar with the given {name: bytes} contents and return its path."""
    def _make(name, files, directory=None):
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_bytes(_zip_bytes(files))
        return path
    return _make


@pytest.fixture
def make_war(tmp_path):
    """Write a WAR with WEB-INF/classes files and WEB-INF/lib jars."""
    def _make(name, class_files=None, jars=None, extra=None):
        contents = {}
        for cname, data in (class_files or {}).items():
            contents[f"WEB-INF/classes/{cname}"] = data
        for jar_name, jar_files in (jars or {}).items():
            contents[f"WEB-INF/lib/{jar_name}"] = _zip_bytes(jar_files)
        contents.update(extra or {})
        path = tmp_path / name
        path.write_bytes(_zip_bytes(contents))
        return path
    return _make
