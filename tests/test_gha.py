from tferun.cli.common.gha import in_github_actions, write_output


def test_in_github_actions(monkeypatch):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    assert in_github_actions() is True

    monkeypatch.delenv("GITHUB_ACTIONS")
    assert in_github_actions() is False


def test_write_output_appends_to_github_output(tmp_path, monkeypatch):
    target = tmp_path / "out"
    monkeypatch.setenv("GITHUB_OUTPUT", str(target))

    write_output("run-url", "https://x/runs/run-1")
    write_output("has-changes", "false")

    assert target.read_text() == "run-url=https://x/runs/run-1\nhas-changes=false\n"


def test_write_output_multiline_uses_delimiter(tmp_path, monkeypatch):
    target = tmp_path / "out"
    monkeypatch.setenv("GITHUB_OUTPUT", str(target))

    write_output("tf-lines", "a\nb")

    lines = target.read_text().splitlines()
    assert lines[0].startswith("tf-lines<<ghadelimiter_")
    assert lines[1:3] == ["a", "b"]
    assert lines[3] == lines[0].split("<<", 1)[1]


def test_write_output_without_file_uses_workflow_command(monkeypatch, capsys):
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)

    write_output("tf-x", "1\n2")

    assert capsys.readouterr().out == "::set-output name=tf-x::1%0A2\n"
