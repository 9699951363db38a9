"""
Minimal Hack CPU used by the tests to execute generated assembly.

Assembles the text the translator emits (A/C instructions, labels, comments)
and runs it against a 64K word RAM with 16-bit two's complement arithmetic.
Unknown symbols become variables from address 16 on, as in the real
assembler.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

PREDEFINED = {
    "SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
    "SCREEN": 16384, "KBD": 24576,
}
PREDEFINED.update({f"R{i}": i for i in range(16)})

COMP = {
    "0": lambda a, d, m: 0,
    "1": lambda a, d, m: 1,
    "-1": lambda a, d, m: -1,
    "D": lambda a, d, m: d,
    "A": lambda a, d, m: a,
    "M": lambda a, d, m: m,
    "!D": lambda a, d, m: ~d,
    "!A": lambda a, d, m: ~a,
    "!M": lambda a, d, m: ~m,
    "-D": lambda a, d, m: -d,
    "-A": lambda a, d, m: -a,
    "-M": lambda a, d, m: -m,
    "D+1": lambda a, d, m: d + 1,
    "A+1": lambda a, d, m: a + 1,
    "M+1": lambda a, d, m: m + 1,
    "D-1": lambda a, d, m: d - 1,
    "A-1": lambda a, d, m: a - 1,
    "M-1": lambda a, d, m: m - 1,
    "D+A": lambda a, d, m: d + a,
    "D+M": lambda a, d, m: d + m,
    "D-A": lambda a, d, m: d - a,
    "D-M": lambda a, d, m: d - m,
    "A-D": lambda a, d, m: a - d,
    "M-D": lambda a, d, m: m - d,
    "D&A": lambda a, d, m: d & a,
    "D&M": lambda a, d, m: d & m,
    "D|A": lambda a, d, m: d | a,
    "D|M": lambda a, d, m: d | m,
}

JUMPS = {
    "JGT": lambda v: v > 0,
    "JEQ": lambda v: v == 0,
    "JGE": lambda v: v >= 0,
    "JLT": lambda v: v < 0,
    "JNE": lambda v: v != 0,
    "JLE": lambda v: v <= 0,
    "JMP": lambda v: True,
}

Instruction = Tuple


def to_word(value: int) -> int:
    """Wrap to a signed 16-bit value."""
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def assemble(source: Union[str, Iterable]) -> Tuple[List[Instruction], Dict[str, int]]:
    """Two-pass assembly into ("A", value) / ("C", dest, comp, jump) tuples."""
    if isinstance(source, str):
        lines = source.splitlines()
    else:
        lines = [str(node) for node in source]

    pending: List[str] = []
    labels: Dict[str, int] = {}
    for raw in lines:
        text = raw.split("//", 1)[0].strip()
        if not text:
            continue
        if text.startswith("(") and text.endswith(")"):
            labels[text[1:-1]] = len(pending)
        else:
            pending.append(text)

    symbols = dict(PREDEFINED)
    symbols.update(labels)
    next_variable = 16

    rom: List[Instruction] = []
    for text in pending:
        if text.startswith("@"):
            value = text[1:]
            if value.isdigit():
                rom.append(("A", int(value)))
                continue
            if value not in symbols:
                symbols[value] = next_variable
                next_variable += 1
            rom.append(("A", symbols[value]))
            continue

        dest, comp, jump = None, text, None
        if "=" in comp:
            dest, comp = comp.split("=", 1)
        if ";" in comp:
            comp, jump = comp.split(";", 1)
        if comp not in COMP:
            raise ValueError(f"unknown comp {comp!r} in {text!r}")
        if jump is not None and jump not in JUMPS:
            raise ValueError(f"unknown jump {jump!r} in {text!r}")
        rom.append(("C", dest, comp, jump))

    return rom, symbols


class HackEmulator:
    """Executes assembled Hack code; RAM can be seeded before running."""

    def __init__(self, source, ram: Optional[Dict[int, int]] = None):
        self.rom, self.symbols = assemble(source)
        self.ram = [0] * 0x10000
        self.a = 0
        self.d = 0
        self.pc = 0
        self.steps = 0
        for address, value in (ram or {}).items():
            self.ram[address] = to_word(value)

    def step(self) -> None:
        instruction = self.rom[self.pc]
        if instruction[0] == "A":
            self.a = instruction[1]
            self.pc += 1
            return

        _, dest, comp, jump = instruction
        address = self.a & 0xFFFF
        value = to_word(COMP[comp](self.a, self.d, self.ram[address]))
        target = self.a

        if dest:
            if "M" in dest:
                self.ram[address] = value
            if "A" in dest:
                self.a = value
            if "D" in dest:
                self.d = value

        if jump and JUMPS[jump](value):
            self.pc = target
        else:
            self.pc += 1

    def run(self, until: Optional[str] = None, max_steps: int = 100000) -> "HackEmulator":
        """
        Run until the program falls off the end of ROM, or until the PC
        reaches the address of label ``until``.
        """
        stop = self.symbols[until] if until is not None else None
        while self.pc < len(self.rom) and self.pc != stop:
            if self.steps >= max_steps:
                raise RuntimeError(f"no halt after {max_steps} steps (pc={self.pc})")
            self.step()
            self.steps += 1
        return self

    @property
    def sp(self) -> int:
        return self.ram[0]

    def top(self, depth: int = 1) -> int:
        """Value ``depth`` slots below SP (1 = top of stack)."""
        return self.ram[self.sp - depth]

    def address_of(self, symbol: str) -> int:
        return self.symbols[symbol]
