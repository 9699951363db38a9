import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from server import TranslateRequest, UnitSource, app, translate


class TestTranslateEndpoint(unittest.TestCase):
    def test_route_registered(self) -> None:
        paths = {route.path for route in app.routes}
        self.assertIn("/translate", paths)

    def test_successful_translation(self) -> None:
        req = TranslateRequest(units=[
            UnitSource(name="Main", code="function Main.main 0\npush constant 1\nreturn"),
            UnitSource(name="Sys", code="function Sys.init 0\ncall Main.main 0"),
        ])

        resp = translate(req)

        self.assertTrue(resp.ok)
        self.assertEqual(resp.diagnostics, [])
        lines = resp.asm.splitlines()
        self.assertEqual(lines[:5], ["@256", "D=A", "@SP", "M=D", "(Sys.init)"])
        self.assertEqual(resp.statistics.units_translated, 2)
        self.assertEqual(resp.statistics.call_sites, 1)

    def test_diagnostics(self) -> None:
        req = TranslateRequest(units=[
            UnitSource(name="Main", code="push constant 5\npop constant 0\npush constant 6"),
            UnitSource(name="Other", code="push that"),
        ])

        resp = translate(req)

        self.assertFalse(resp.ok)
        self.assertEqual([d.kind for d in resp.diagnostics], ["semantic", "syntax"])
        semantic, syntax = resp.diagnostics
        self.assertEqual((semantic.unit, semantic.line, semantic.command), ("Main", 2, "pop constant 0"))
        self.assertEqual((syntax.unit, syntax.line, syntax.command), ("Other", 1, "push that"))
        self.assertIn("@5", resp.asm)
        self.assertNotIn("@6", resp.asm)
        self.assertEqual(resp.statistics.units_failed, 2)

    def test_options(self) -> None:
        req = TranslateRequest(
            units=[UnitSource(name="Boot", code="push constant 3")],
            entry_unit="Boot",
            annotate=True,
            stack_base=1024,
        )

        resp = translate(req)

        self.assertTrue(resp.ok)
        self.assertIn("// bootstrap: SP = 1024", resp.asm)
        self.assertIn("// push constant 3", resp.asm)
        self.assertIn("@1024", resp.asm)


if __name__ == "__main__":
    unittest.main()
