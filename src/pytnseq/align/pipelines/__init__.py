from .base import Pipeline, PipelineResult, get_pipelines, register_pipeline
from .sam import SamPipeline
from .bowtie2 import Bowtie2Pipeline
