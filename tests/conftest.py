from pathlib import Path

import pytest

from pycfgparse import CfgParser


def assert_offsets_match_file(path: Path, parser: CfgParser, codec: str = 'utf-8'):
    """Every recorded offset must sit right after its own header line."""
    raw = path.read_bytes()
    for name, pos in parser.positions().items():
        assert 0 < pos <= len(raw)
        assert raw[pos - 1:pos] == b'\n', name
        assert raw[:pos].rstrip(b'\r\n').endswith(f'[{name}]'.encode(codec)), name

    # a fresh read must agree with the patched in-memory state.
    fresh = CfgParser(str(path), encoding=codec)
    fresh.read()
    assert fresh.positions() == parser.positions()


@pytest.fixture()
def write_cfg(tmp_path: Path):
    def _write(name: str, text: str | bytes) -> Path:
        path = tmp_path / name
        if isinstance(text, bytes):
            path.write_bytes(text)
        else:
            path.write_bytes(text.encode('utf-8'))
        return path
    return _write
