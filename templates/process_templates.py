"""
Built-in process templates offered by the process editor.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from nfbuilder.ir.pipeline_schema import NextflowProcess, ProcessTemplate, model_copy_compat

PROCESS_TEMPLATES: List[ProcessTemplate] = [
    ProcessTemplate(
        template_name="FASTQC",
        template_description="Run FastQC on FASTQ files.",
        process_name_suggestion="FASTQC_PROCESS",
        description="Performs quality control on FASTQ files using FastQC.",
        input_declarations=(
            "tuple val(meta), path(reads) // Each element is a FASTQ file (e.g., sample_R1.fastq.gz)"
        ),
        output_declarations=(
            'tuple val(meta), path("*.zip"), emit: zip\n'
            'tuple val(meta), path("*.html"), emit: html\n'
            'path "versions.yml", emit: versions'
        ),
        directive_declarations=(
            'tag "${meta.id}"\n'
            'publishDir "${params.outdir}/fastqc/${meta.id}", mode: \'copy\', pattern: "*.{zip,html}"'
        ),
        script=(
            "#!/bin/bash\n"
            "fastqc -o . --nogroup -q ${reads}\n"
            "\n"
            "cat <<-END_VERSIONS > versions.yml\n"
            "\"${task.process}\":\n"
            "    fastqc: $(fastqc --version | sed 's/FastQC v//')\n"
            "END_VERSIONS"
        ),
    ),
    ProcessTemplate(
        template_name="BWA_MEM_ALIGN",
        template_description="Align paired-end reads with BWA-MEM.",
        process_name_suggestion="BWA_MEM",
        description=(
            "Aligns paired-end FASTQ reads to a reference genome using BWA-MEM "
            "and converts to sorted BAM."
        ),
        input_declarations=(
            "tuple val(meta), path(reads) // Paired-end reads e.g. [sample_R1.fq.gz, sample_R2.fq.gz]\n"
            "path index // BWA index path prefix\n"
            "val num_cpus"
        ),
        output_declarations=(
            'tuple val(meta), path("*.bam"), emit: bam\n'
            'tuple val(meta), path("*.bai"), emit: bai\n'
            'path "versions.yml", emit: versions'
        ),
        directive_declarations=(
            'tag "${meta.id}"\n'
            'publishDir "${params.outdir}/bwa/${meta.id}", mode: \'copy\''
        ),
        script=(
            "#!/bin/bash\n"
            "bwa mem -t ${num_cpus ?: task.cpus} \\\n"
            "    ${index} \\\n"
            "    ${reads[0]} \\\n"
            "    ${reads[1]} | \\\n"
            "    samtools view -Sb - > ${meta.id}.unsorted.bam\n"
            "\n"
            "samtools sort -@ ${num_cpus ?: task.cpus} -o ${meta.id}.bam ${meta.id}.unsorted.bam\n"
            "samtools index ${meta.id}.bam\n"
            "\n"
            "cat <<-END_VERSIONS > versions.yml\n"
            "\"${task.process}\":\n"
            "    bwa: $(bwa 2>&1 | grep Version | sed 's/Version: //')\n"
            "    samtools: $(samtools --version | head -n 1 | sed 's/samtools //')\n"
            "END_VERSIONS"
        ),
    ),
    ProcessTemplate(
        template_name="SIMPLE_ECHO",
        template_description="A very simple process that echos an input.",
        process_name_suggestion="ECHO_INPUT",
        description="Echos the input value to a file.",
        input_declarations="val x",
        output_declarations='path "output.txt", emit: result',
        directive_declarations='tag "${x}"',
        script='#!/bin/bash\necho "${x}" > output.txt',
    ),
]


def template_map() -> Dict[str, ProcessTemplate]:
    return {template.template_name: template for template in PROCESS_TEMPLATES}


def get_template(template_name: str) -> ProcessTemplate:
    try:
        return template_map()[template_name]
    except KeyError:
        raise LookupError(
            f"Unknown process template '{template_name}'. "
            f"Available: {', '.join(sorted(template_map()))}"
        ) from None


def apply_template(process: NextflowProcess, template_name: Optional[str]) -> NextflowProcess:
    """
    Fill a process from a template, keeping its id.

    The template's suggested name is only used when the process is still
    unnamed. An empty template name clears a process that has not been
    named yet and leaves a named one untouched.
    """
    if not template_name:
        if process.name:
            return process
        return NextflowProcess(id=process.id, name="")

    template = get_template(template_name)
    return model_copy_compat(
        process,
        update={
            "name": process.name or template.process_name_suggestion,
            "description": template.description,
            "input_declarations": template.input_declarations,
            "output_declarations": template.output_declarations,
            "directive_declarations": template.directive_declarations,
            "script": template.script,
        },
    )
