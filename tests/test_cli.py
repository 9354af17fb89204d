import json

from archive_zero import __version__
from archive_zero.cli import main


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_run_json(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    rc = main(["--no-delay", "run", "--json", "echo Hello There", "view z-002", "view z-999"])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    texts = [line["text"] for line in payload["lines"]]
    assert "Hello There" in texts
    assert "Opening Z-002..." in texts
    assert payload["navigation"] == ["z-002.html"]
    assert (tmp_path / "logs").is_dir()


def test_run_reads_stdin(tmp_path, monkeypatch, capsys):
    import io
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("help\n\narchives\n"))
    rc = main(["--no-delay", "run", "--stdin", "--json"])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    texts = [line["text"] for line in payload["lines"]]
    assert "> help" in texts
    assert "> archives" in texts
    assert "Z-010" in texts


def test_run_keeps_going_after_bad_sector(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    rc = main(["--no-delay", "run", "--json", "scan ²", "echo after"])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    texts = [line["text"] for line in payload["lines"]]
    assert "[ERROR] Invalid sector: ²" in texts
    assert texts[-1] == "after"
