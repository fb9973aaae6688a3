import base64
import json

import pytest

from firesafe.config import settings
from firesafe.main import build_parser, main


@pytest.fixture(autouse=True)
def audit_file(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "AUDIT_LOG_FILE", str(tmp_path / "logs" / "audit.log"))


@pytest.fixture
def payload(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text(
        json.dumps(
            {
                "formTitle": "Teste de Fluxo de Hidrante",
                "generalInfo": {"propertyName": "Distrito Industrial", "date": "2024-07-01"},
                "formData": {"residual": {"staticPressure": 62}, "flow": {"outlets": [{"pitotPressure": 18}]}},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_render_saves_pdf(payload, tmp_path):
    out = tmp_path / "out"
    assert main(["render", str(payload), "-o", str(out)]) == 0
    files = list(out.glob("*.pdf"))
    assert [f.name for f in files] == ["Report_Teste_de_Fluxo_de_Hidrante_Distrito_Industrial_2024-07-01.pdf"]
    assert (tmp_path / "logs" / "audit.log").read_text(encoding="utf-8").strip()


def test_render_base64(payload, capsys):
    assert main(["render", str(payload), "--base64", "--language", "en"]) == 0
    out = capsys.readouterr().out.strip()
    assert base64.b64decode(out).startswith(b"%PDF")


def test_missing_payload(tmp_path):
    assert main(["render", str(tmp_path / "nope.json")]) == 1


def test_invalid_payload(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"formData": {}}), encoding="utf-8")
    assert main(["render", str(bad), "-o", str(tmp_path)]) == 1


def test_schemas_listing(capsys):
    assert main(["schemas"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("wet-sprinkler\t")


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
