from nfbuilder.compiler.nextflow_codegen import (
    CodegenError,
    CodegenResult,
    NextflowCodeGenerator,
)

__all__ = ["NextflowCodeGenerator", "CodegenResult", "CodegenError"]
