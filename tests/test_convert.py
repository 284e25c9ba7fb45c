from pathlib import Path

from pycfgparse import CfgJsonExporter, CfgParser, CfgYamlExporter


def _parsed(write_cfg) -> CfgParser:
    path = write_cfg('src.ini', '[base]\nusername=madhusudan\nport=8080\n\n[名前]\nkey=値\n')
    cfg = CfgParser(str(path))
    cfg.read()
    return cfg


def test_json_export(write_cfg, tmp_path: Path):
    cfg = _parsed(write_cfg)
    out = tmp_path / 'out.json'
    CfgJsonExporter(str(out)).write(cfg.store)
    assert '"名前"' in out.read_text(encoding='utf-8')

    store = CfgJsonExporter(str(out)).read()
    assert store['base'].items == {'username': 'madhusudan', 'port': '8080'}
    assert store.positions() == {'base': 0, '名前': 0}


def test_yaml_export(write_cfg, tmp_path: Path):
    cfg = _parsed(write_cfg)
    out = tmp_path / 'out.yaml'
    CfgYamlExporter(str(out)).write(cfg.store)
    assert out.read_text(encoding='utf-8').startswith('base:\n')

    # pure digits come back as str, not int.
    store = CfgYamlExporter(str(out)).read()
    assert store['base'].items['port'] == '8080'
    assert store['名前'].items == {'key': '値'}


def test_yaml_read_handles_empty_sections(tmp_path: Path):
    src = tmp_path / 'hand.yaml'
    src.write_text('empty:\nfilled:\n  a: 1\n  b:\n', encoding='utf-8')
    store = CfgYamlExporter(str(src)).read()
    assert store['empty'].items == {}
    assert store['filled'].items == {'a': '1', 'b': ''}
