import json

from conftest import FakeLLM
from nfbuilder.ir.pipeline_schema import load_pipeline_json
from nfbuilder.main import PipelineBuilder, main


def _write(path, pipeline):
    path.write_text(pipeline.to_json(), encoding="utf-8")
    return str(path)


def test_init_writes_default_pipeline(tmp_path):
    target = tmp_path / "pipeline.json"

    assert main(["init", "--output", str(target)], builder=PipelineBuilder()) == 0
    assert load_pipeline_json(target.read_text(encoding="utf-8")).name == "MyAwesomePipeline"


def test_generate_prints_summary(tmp_path, sample_pipeline, capsys):
    path = _write(tmp_path / "p.json", sample_pipeline)
    out_dir = tmp_path / "out"

    code = main(["generate", "--pipeline", path, "--output-dir", str(out_dir)], builder=PipelineBuilder())

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["files"] == ["main.nf", "nextflow.config"]
    assert (out_dir / "main.nf").exists()


def test_visualize_writes_svg(tmp_path, sample_pipeline, capsys):
    path = _write(tmp_path / "p.json", sample_pipeline)
    svg_path = tmp_path / "graph.svg"

    code = main(["visualize", "--pipeline", path, "--svg", str(svg_path)], builder=PipelineBuilder())

    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert [node["id"] for node in report["layout"]["nodes"]] == ["QC", "ALIGN", "COUNT"]
    assert svg_path.read_text(encoding="utf-8").startswith("<svg")


def test_editing_commands_update_file(tmp_path, sample_pipeline):
    path = _write(tmp_path / "p.json", sample_pipeline)
    builder = PipelineBuilder()

    assert main(["add-param", "--pipeline", path, "--name", "outdir", "--type", "directory"], builder=builder) == 0
    assert main(["add-process", "--pipeline", path, "--template", "SIMPLE_ECHO"], builder=builder) == 0
    assert main(["remove", "--pipeline", path, "--kind", "process", "--name", "ALIGN"], builder=builder) == 0
    assert main(["bump-version", "--pipeline", path, "--part", "minor"], builder=builder) == 0

    updated = load_pipeline_json((tmp_path / "p.json").read_text(encoding="utf-8"))
    assert [param.name for param in updated.parameters] == ["reads", "threads", "outdir"]
    assert updated.process_names() == ["QC", "COUNT", "ECHO_INPUT"]
    assert updated.version == "1.3.0"


def test_remove_unknown_name_fails(tmp_path, sample_pipeline, capsys):
    path = _write(tmp_path / "p.json", sample_pipeline)

    code = main(["remove", "--pipeline", path, "--kind", "param", "--name", "nope"], builder=PipelineBuilder())

    assert code == 2
    assert "No param named 'nope'" in capsys.readouterr().err


def test_suggest_without_client_fails_cleanly(tmp_path, sample_pipeline, capsys):
    path = _write(tmp_path / "p.json", sample_pipeline)

    code = main(["suggest-workflow", "--pipeline", path, "--goal", "x"], builder=PipelineBuilder())

    assert code == 2
    assert "AI features are disabled" in capsys.readouterr().err


def test_suggest_workflow_apply(tmp_path, sample_pipeline):
    path = _write(tmp_path / "p.json", sample_pipeline)
    builder = PipelineBuilder(llm=FakeLLM("QC(x)"))

    code = main(["suggest-workflow", "--pipeline", path, "--goal", "qc only", "--apply"], builder=builder)

    assert code == 0
    updated = load_pipeline_json((tmp_path / "p.json").read_text(encoding="utf-8"))
    assert updated.workflow_content == "QC(x)"


def test_templates_command(capsys):
    assert main(["templates"], builder=PipelineBuilder()) == 0
    names = [item["template_name"] for item in json.loads(capsys.readouterr().out)]
    assert names == ["FASTQC", "BWA_MEM_ALIGN", "SIMPLE_ECHO"]
