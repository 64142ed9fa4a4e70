import pytest

from nfbuilder.compiler.nextflow_codegen import (
    CONFIG_FILENAME,
    SCRIPT_FILENAME,
    NextflowCodeGenerator,
    render_parameter_value,
)
from nfbuilder.ir.pipeline_schema import NextflowProcess, PipelineParameter
from nfbuilder.ir.validators import PipelineValidationError


def test_script_has_params_processes_and_workflow(sample_pipeline):
    script = NextflowCodeGenerator().render_script(sample_pipeline)

    assert script.startswith("#!/usr/bin/env nextflow\n")
    assert "nextflow.enable.dsl = 2" in script
    assert " * RNASeq v1.2.3" in script
    assert "params.reads = 'data/*.fq.gz'" in script
    assert "params.threads = 4" in script
    assert "process QC {" in script
    assert "    // Quality control" in script
    assert "    input:\n        path reads" in script
    assert '    output:\n        path "qc.txt", emit: report' in script
    assert '        fastqc ${reads} > qc.txt' in script
    assert "workflow {\n    reads_ch = Channel.fromPath(params.reads)" in script
    assert script.rstrip().endswith("}")


def test_process_without_script_gets_stub():
    process = NextflowProcess(id="p", name="EMPTY")

    lines = NextflowCodeGenerator()._render_process(process)

    assert '        echo "EMPTY: no script defined"' in lines
    assert "    input:" not in lines


def test_config_has_manifest_params_and_extra_content(sample_pipeline):
    config = NextflowCodeGenerator().render_config(sample_pipeline)

    assert "manifest {" in config
    assert "    name = 'RNASeq'" in config
    assert "    version = '1.2.3'" in config
    assert "    mainScript = 'main.nf'" in config
    assert "params {\n    reads = 'data/*.fq.gz'\n    threads = 4\n}" in config
    assert config.rstrip().endswith("process.cpus = 2")


@pytest.mark.parametrize(
    "param_type,raw,expected",
    [
        ("string", "hello", "'hello'"),
        ("string", "it's", "'it\\'s'"),
        ("integer", "8", "8"),
        ("integer", "", "null"),
        ("integer", "many", "'many'"),
        ("boolean", "TRUE", "true"),
        ("path", "", "null"),
        ("string", "", "''"),
    ],
)
def test_parameter_values(param_type, raw, expected):
    param = PipelineParameter(id="x", name="p", default_value=raw, type=param_type)

    assert render_parameter_value(param) == expected


def test_generate_writes_both_files(sample_pipeline, tmp_path):
    result = NextflowCodeGenerator().generate(sample_pipeline, str(tmp_path / "out"))

    assert result.success
    assert sorted(result.files) == sorted([SCRIPT_FILENAME, CONFIG_FILENAME])
    assert (tmp_path / "out" / SCRIPT_FILENAME).read_text(encoding="utf-8") == result.files[SCRIPT_FILENAME]
    assert (tmp_path / "out" / CONFIG_FILENAME).exists()


def test_invalid_identifier_is_captured_per_file(sample_pipeline):
    bad = sample_pipeline.model_copy(
        update={"parameters": [PipelineParameter(id="bad", name="my param")]}
    )

    result = NextflowCodeGenerator().render_all(bad)

    assert not result.success
    assert set(result.errors) == {SCRIPT_FILENAME, CONFIG_FILENAME}
    assert "not a valid Nextflow identifier" in result.errors[SCRIPT_FILENAME]


def test_invalid_pipeline_is_rejected_before_rendering(sample_pipeline):
    broken = sample_pipeline.model_copy(update={"version": "one"})

    with pytest.raises(PipelineValidationError):
        NextflowCodeGenerator().render_all(broken)
