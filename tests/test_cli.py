from sitesmith import cli
from sitesmith.exceptions import QuotaExhaustedError
from sitesmith.schemas.generation import CodeBundle


def test_write_then_read_bundle(tmp_path):
    bundle = CodeBundle(html="<main><h1>Hi</h1></main>", css="h1{color:red}", js="console.log('hi')")

    written = cli.write_bundle(bundle, tmp_path / "site", title="Demo")

    assert [path.name for path in written] == ["index.html", "styles.css", "script.js"]
    index = (tmp_path / "site" / "index.html").read_text(encoding="utf-8")
    assert "<title>Demo</title>" in index
    assert cli.read_bundle(tmp_path / "site") == bundle


def test_generate_command_writes_files(tmp_path, monkeypatch, capsys):
    seen = {}

    async def fake_generate(request):
        seen["request"] = request
        return CodeBundle(html="<p>new</p>", css="p{}", js="")

    monkeypatch.setattr(cli, "_generate", fake_generate)

    exit_code = cli.main(["generate", "A tiny page", "--out", str(tmp_path)])

    assert exit_code == 0
    assert seen["request"].existing_code is None
    assert (tmp_path / "styles.css").read_text(encoding="utf-8") == "p{}"
    assert "Wrote" in capsys.readouterr().out


def test_generate_command_revises_existing_site(tmp_path, monkeypatch):
    cli.write_bundle(CodeBundle(html="<p>old</p>", css="", js=""), tmp_path)
    seen = {}

    async def fake_generate(request):
        seen["request"] = request
        return CodeBundle(html="<p>new</p>")

    monkeypatch.setattr(cli, "_generate", fake_generate)

    assert cli.main(["generate", "Say new", "--out", str(tmp_path), "--revise"]) == 0
    assert seen["request"].existing_code.html == "<p>old</p>"
    assert cli.read_bundle(tmp_path).html == "<p>new</p>"


def test_generate_command_reports_gateway_errors(tmp_path, monkeypatch, capsys):
    async def fake_generate(request):
        raise QuotaExhaustedError()

    monkeypatch.setattr(cli, "_generate", fake_generate)

    assert cli.main(["generate", "A page", "--out", str(tmp_path)]) == 1
    assert "AI credits exhausted" in capsys.readouterr().out
    assert not (tmp_path / "index.html").exists()


def test_blank_prompt_is_rejected(tmp_path, capsys):
    assert cli.main(["generate", "   ", "--out", str(tmp_path)]) == 2
    assert "blank" in capsys.readouterr().out
