from __future__ import annotations

from typing import Any, List, Optional

import pytest

from nfbuilder.ir.pipeline_schema import NextflowProcess, Pipeline, PipelineParameter


class FakeResponse:
    def __init__(self, content: Any = "", tool_calls: Optional[List[Any]] = None) -> None:
        self.content = content
        self.tool_calls = tool_calls or []
        self.additional_kwargs: dict = {}


class FakeLLM:
    """Returns canned responses in order and records every prompt."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.prompts: List[Any] = []

    def invoke(self, prompt: Any, **kwargs: Any) -> Any:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("FakeLLM ran out of responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, FakeResponse):
            return response
        return FakeResponse(content=response)


class FakeToolLLM(FakeLLM):
    def __init__(self, *responses: Any) -> None:
        super().__init__(*responses)
        self.bound: List[Any] = []

    def bind_tools(self, tools: List[Any], **kwargs: Any) -> "FakeToolLLM":
        self.bound.append((tools, kwargs))
        return self


@pytest.fixture()
def sample_pipeline() -> Pipeline:
    return Pipeline(
        name="RNASeq",
        description="Quantify RNA-seq reads.",
        version="1.2.3",
        parameters=[
            PipelineParameter(id="param-1", name="reads", default_value="data/*.fq.gz", type="path"),
            PipelineParameter(id="param-2", name="threads", default_value="4", type="integer"),
        ],
        processes=[
            NextflowProcess(
                id="proc-1",
                name="QC",
                description="Quality control",
                input_declarations="path reads",
                output_declarations='path "qc.txt", emit: report',
                script="fastqc ${reads} > qc.txt",
            ),
            NextflowProcess(id="proc-2", name="ALIGN", input_declarations="path reads"),
            NextflowProcess(id="proc-3", name="COUNT"),
        ],
        workflow_content=(
            "reads_ch = Channel.fromPath(params.reads)\n"
            "QC(reads_ch)\n"
            "ALIGN(reads_ch)\n"
            "COUNT(QC.out.report, ALIGN.out)"
        ),
        nextflow_config_content="process.cpus = 2",
    )
