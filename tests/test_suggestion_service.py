import pytest

from nfbuilder.ir.pipeline_schema import (
    AIPipelineSuggestion,
    NextflowProcess,
    ProcessPartsSuggestion,
)
from nfbuilder.services.suggestion_service import SuggestionMergeError, SuggestionService


def _suggestion(**overrides):
    payload = {
        "pipelineName": "VariantCalling",
        "pipelineDescription": "Call variants.",
        "parameters": [
            {"name": "input dir", "type": "directory", "defaultValue": "./data"},
            {"name": "", "type": "float", "defaultValue": 3},
        ],
        "processes": [
            {"name": "align reads", "script": "bwa mem"},
            {"description": "unnamed"},
        ],
        "workflowContent": "ALIGN_READS(Channel.fromPath(params.input_dir))",
    }
    payload.update(overrides)
    return AIPipelineSuggestion.model_validate(payload)


def test_pipeline_suggestion_replaces_collections(sample_pipeline):
    merged = SuggestionService.apply_pipeline_suggestion(sample_pipeline, _suggestion())

    assert merged.name == "VariantCalling"
    assert merged.version == "1.2.3"
    assert [param.name for param in merged.parameters] == ["input_dir", "param_1"]
    assert [param.type for param in merged.parameters] == ["directory", "string"]
    assert merged.parameters[1].default_value == "3"
    assert merged.process_names() == ["ALIGN_READS", "PROCESS_1"]
    assert merged.processes[0].script == "bwa mem"
    assert merged.nextflow_config_content == sample_pipeline.nextflow_config_content
    assert all(param.id.startswith("param-") for param in merged.parameters)


def test_pipeline_suggestion_keeps_current_values_when_blank(sample_pipeline):
    merged = SuggestionService.apply_pipeline_suggestion(
        sample_pipeline,
        _suggestion(pipelineDescription="", pipelineVersion="2.0.0", workflowContent=""),
    )

    assert merged.description == sample_pipeline.description
    assert merged.version == "2.0.0"
    assert merged.workflow_content == sample_pipeline.workflow_content


def test_workflow_suggestion_replaces_text(sample_pipeline):
    merged = SuggestionService.apply_workflow_suggestion(sample_pipeline, "QC(x)")

    assert merged.workflow_content == "QC(x)"
    assert SuggestionService.apply_workflow_suggestion(sample_pipeline, "  ") is sample_pipeline


def test_process_suggestion_merges_one_part():
    process = NextflowProcess(id="p", name="QC", script="old")
    parts = ProcessPartsSuggestion(raw_text="...", input_declarations="path reads")

    merged = SuggestionService.apply_process_suggestion(process, parts, "input_declarations")

    assert merged.input_declarations == "path reads"
    assert merged.script == "old"

    with pytest.raises(SuggestionMergeError):
        SuggestionService.apply_process_suggestion(process, parts, "script")
    with pytest.raises(ValueError):
        SuggestionService.apply_process_suggestion(process, parts, "name")
