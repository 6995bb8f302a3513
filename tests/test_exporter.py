import io
import json

import pytest

from envchain.exporter import Exporter, Format

SAMPLE_ENV = {
    "APP_ENV": "production",
    "DB_URL": "postgres://localhost/mydb",
    "SECRET": "secret",
    "WITH_SPACE": "hello world",
}


def test_invalid_format():
    with pytest.raises(ValueError, match="unsupported format"):
        Exporter("xml")


def test_dotenv():
    out = Exporter(Format.DOTENV).render(SAMPLE_ENV)
    assert "APP_ENV=production\n" in out
    assert 'WITH_SPACE="hello world"' in out


def test_export():
    out = Exporter("export").render(SAMPLE_ENV)
    assert "export DB_URL=postgres://localhost/mydb\n" in out


def test_json():
    out = Exporter(Format.JSON).render(SAMPLE_ENV)
    assert out.startswith("{")
    assert out.strip().endswith("}")
    assert '"APP_ENV": "production"' in out
    assert json.loads(out) == SAMPLE_ENV


def test_sorted_output():
    lines = Exporter(Format.DOTENV).render(SAMPLE_ENV).strip().split("\n")
    assert lines == sorted(lines)
    assert len(lines) == 4


def test_write_to_stream():
    buf = io.StringIO()
    Exporter(Format.DOTENV).write(buf, {"B": "2", "A": "1"})
    assert buf.getvalue() == "A=1\nB=2\n"


def test_quoting_special_characters():
    out = Exporter(Format.DOTENV).render({"H": "a#b", "N": 'x\n"y"'})
    assert out == 'H="a#b"\nN="x\\n\\"y\\""\n'


def test_json_empty():
    assert Exporter(Format.JSON).render({}) == "{\n\n}\n"