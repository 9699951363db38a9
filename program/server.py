from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional

from vm.source_unit import SourceUnit, UnitFailure
from hack.calling_convention import STACK_BASE
from hack.integrated_hack_generator import DEFAULT_ENTRY_UNIT, IntegratedHackGenerator

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

class UnitSource(BaseModel):
    name: str                 # nombre lógico, sin ".vm"
    code: str

class TranslateRequest(BaseModel):
    units: List[UnitSource]
    entry_unit: str = DEFAULT_ENTRY_UNIT
    annotate: bool = False    # opcional: comentar cada bloque con su comando
    stack_base: int = STACK_BASE

class Diagnostic(BaseModel):
    kind: str               # "syntax" | "semantic"
    unit: str
    message: str
    command: Optional[str] = None
    line: Optional[int] = None

class TranslationStats(BaseModel):
    units_translated: int
    units_failed: int
    commands_translated: int
    comparison_labels: int
    call_sites: int
    functions_defined: int
    lines_emitted: int

class TranslateResponse(BaseModel):
    ok: bool
    asm: str
    diagnostics: List[Diagnostic]
    statistics: TranslationStats

def to_diagnostic(failure: UnitFailure) -> Diagnostic:
    return Diagnostic(
        kind=failure.kind,
        unit=failure.unit_name,
        message=failure.message,
        command=failure.command_text or None,
        line=failure.line,
    )

@app.post("/translate", response_model=TranslateResponse)
def translate(req: TranslateRequest):
    units = [SourceUnit.from_text(unit.name, unit.code) for unit in req.units]

    generator = IntegratedHackGenerator(
        entry_unit=req.entry_unit,
        stack_base=req.stack_base,
        annotate=req.annotate,
    )
    asm = generator.generate(units)

    diagnostics = [to_diagnostic(failure) for failure in generator.failures]

    return TranslateResponse(
        ok=not diagnostics,
        asm=asm,
        diagnostics=diagnostics,
        statistics=TranslationStats(**generator.get_statistics()),
    )
