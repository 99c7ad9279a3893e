from __future__ import annotations

import os
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from projmap.config import AnalyzerConfig
from projmap.errors import ManifestResolutionError, ProjectNotFoundError, UnrecognizedProjectError
from projmap.model import ModuleMetrics, ProjectProblems, ProjectStructure
from projmap.project import analyze_problems, analyze_project, calculate_metrics


app = FastAPI(title="projmap")


class AnalyzeRequest(BaseModel):
    root_path: str


class ProblemsRequest(BaseModel):
    structure: ProjectStructure
    config: Optional[AnalyzerConfig] = None


@app.post("/analyze", response_model=ProjectStructure, response_model_by_alias=True)
def analyze(req: AnalyzeRequest) -> ProjectStructure:
    root = os.path.abspath(req.root_path)
    try:
        return analyze_project(root)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnrecognizedProjectError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ManifestResolutionError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/problems", response_model=ProjectProblems)
def problems(req: ProblemsRequest) -> ProjectProblems:
    return analyze_problems(req.structure, req.config)


@app.post("/metrics", response_model=Dict[str, ModuleMetrics])
def metrics(structure: ProjectStructure) -> Dict[str, ModuleMetrics]:
    return calculate_metrics(structure)


def create_app() -> FastAPI:
    return app
