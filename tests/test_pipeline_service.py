import pytest

from nfbuilder.ir.pipeline_schema import NextflowProcess, PipelineParameter
from nfbuilder.ir.validators import PipelineValidationError
from nfbuilder.services.pipeline_service import (
    PipelineService,
    new_parameter_id,
    new_process_id,
)


def test_update_field_returns_new_pipeline(sample_pipeline):
    updated = PipelineService.update_field(sample_pipeline, "name", "Other")

    assert updated.name == "Other"
    assert sample_pipeline.name == "RNASeq"


def test_update_field_rejects_collections(sample_pipeline):
    with pytest.raises(PipelineValidationError):
        PipelineService.update_field(sample_pipeline, "processes", [])


def test_parameter_add_replace_delete(sample_pipeline):
    added = PipelineService.add_or_update_parameter(
        sample_pipeline, PipelineParameter(id="param-new", name="outdir", type="directory")
    )
    assert [param.name for param in added.parameters] == ["reads", "threads", "outdir"]

    replaced = PipelineService.add_or_update_parameter(
        added, PipelineParameter(id="param-1", name="input")
    )
    assert [param.name for param in replaced.parameters] == ["input", "threads", "outdir"]

    removed = PipelineService.delete_parameter(replaced, "param-2")
    assert [param.id for param in removed.parameters] == ["param-1", "param-new"]


def test_blank_parameter_name_is_rejected(sample_pipeline):
    with pytest.raises(PipelineValidationError):
        PipelineService.add_or_update_parameter(
            sample_pipeline, PipelineParameter(id="x", name=" ")
        )


def test_process_add_replace_delete(sample_pipeline):
    added = PipelineService.add_or_update_process(
        sample_pipeline, NextflowProcess(id="proc-9", name="REPORT")
    )
    assert added.process_names() == ["QC", "ALIGN", "COUNT", "REPORT"]

    replaced = PipelineService.add_or_update_process(
        added, NextflowProcess(id="proc-2", name="MAP")
    )
    assert replaced.process_names() == ["QC", "MAP", "COUNT", "REPORT"]

    removed = PipelineService.delete_process(replaced, "proc-1")
    assert removed.process_names() == ["MAP", "COUNT", "REPORT"]

    with pytest.raises(PipelineValidationError):
        PipelineService.add_or_update_process(removed, NextflowProcess(id="proc-x", name=""))


def test_bump_version(sample_pipeline):
    assert PipelineService.bump_version(sample_pipeline).version == "1.2.4"
    assert PipelineService.bump_version(sample_pipeline, "major").version == "2.0.0"


def test_generated_ids_are_prefixed_and_unique():
    assert new_parameter_id().startswith("param-")
    assert new_process_id().startswith("proc-")
    assert new_process_id() != new_process_id()
