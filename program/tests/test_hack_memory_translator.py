import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from hack_emulator import HackEmulator
from hack.memory_translator import MemoryTranslator
from hack.translator_base import HackTranslatorBase, TranslationError
from vm.parser import parse_command

# Segment bases used by the behavioural tests
RAM = {0: 256, 1: 300, 2: 400, 3: 3000, 4: 3010}


class TestMemoryTranslator(unittest.TestCase):
    def setUp(self) -> None:
        self.base_translator = HackTranslatorBase()
        self.base_translator.context.enter_unit("Main")
        self.translator = MemoryTranslator(self.base_translator)

    def _get_emitted_code(self) -> str:
        return "\n".join(str(instr) for instr in self.base_translator.text_section)

    def _run(self, *lines: str, ram=None) -> HackEmulator:
        for text in lines:
            self.translator.translate(parse_command(text))
        seeded = dict(RAM)
        seeded.update(ram or {})
        return HackEmulator(self.base_translator.text_section, ram=seeded).run()

    # push
    def test_push_constant(self) -> None:
        cpu = self._run("push constant 42")
        self.assertEqual(cpu.sp, 257)
        self.assertEqual(cpu.ram[256], 42)

    def test_push_base_pointer_segments(self) -> None:
        cases = [("local", 300), ("argument", 400), ("this", 3000), ("that", 3010)]
        for segment, base in cases:
            with self.subTest(segment=segment):
                self.setUp()
                cpu = self._run(f"push {segment} 2", ram={base + 2: 91})
                self.assertEqual(cpu.sp, 257)
                self.assertEqual(cpu.ram[256], 91)

    def test_push_temp_and_pointer(self) -> None:
        cpu = self._run("push temp 6", "push pointer 0", "push pointer 1", ram={11: 36})
        self.assertEqual(cpu.ram[256:259], [36, 3000, 3010])

    # pop
    def test_pop_base_pointer_segments(self) -> None:
        cases = [("local", 300), ("argument", 400), ("this", 3000), ("that", 3010)]
        for segment, base in cases:
            with self.subTest(segment=segment):
                self.setUp()
                cpu = self._run("push constant 10", f"pop {segment} 5")
                self.assertEqual(cpu.sp, 256)
                self.assertEqual(cpu.ram[base + 5], 10)

    def test_pop_temp(self) -> None:
        cpu = self._run("push constant 510", "pop temp 6")
        self.assertEqual(cpu.ram[11], 510)
        self.assertEqual(cpu.sp, 256)

    def test_pop_pointer_retargets_this_and_that(self) -> None:
        cpu = self._run(
            "push constant 4000", "pop pointer 0",
            "push constant 5000", "pop pointer 1",
            "push constant 7", "pop this 1",
            "push constant 8", "pop that 2",
        )
        self.assertEqual((cpu.ram[3], cpu.ram[4]), (4000, 5000))
        self.assertEqual((cpu.ram[4001], cpu.ram[5002]), (7, 8))

    # static
    def test_static_symbols_scoped_by_unit(self) -> None:
        self.translator.translate(parse_command("push static 3"))
        self.base_translator.context.enter_unit("Other")
        self.translator.translate(parse_command("pop static 3"))
        code = self._get_emitted_code()
        self.assertIn("@Main.3", code)
        self.assertIn("@Other.3", code)

    def test_static_round_trip(self) -> None:
        cpu = self._run("push constant 12", "pop static 0", "push static 0")
        self.assertEqual(cpu.ram[cpu.address_of("Main.0")], 12)
        self.assertEqual(cpu.ram[256], 12)

    # errors and edge cases
    def test_pop_constant_rejected(self) -> None:
        with self.assertRaises(TranslationError):
            self.translator.translate(parse_command("pop constant 0"))
        self.assertEqual(self.base_translator.text_section, [])

    def test_pointer_index_out_of_range(self) -> None:
        for text in ("push pointer 2", "pop pointer 5"):
            with self.subTest(text=text):
                with self.assertRaises(TranslationError):
                    self.translator.translate(parse_command(text))
        self.assertEqual(self.base_translator.text_section, [])

    def test_temp_index_not_range_checked(self) -> None:
        self.translator.translate(parse_command("push temp 9"))
        self.assertIn("@R14", self._get_emitted_code())

    def test_large_constant(self) -> None:
        cpu = self._run("push constant 32767")
        self.assertEqual(cpu.ram[256], 32767)


if __name__ == "__main__":
    unittest.main()
