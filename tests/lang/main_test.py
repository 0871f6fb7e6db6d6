from contextlib import redirect_stdout
import io
import os
import unittest

from equation.main import main

EXAMPLES = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "examples")


def execute(*argv):
    output = io.StringIO()
    with redirect_stdout(output):
        main(list(argv))
    return output.getvalue()


class MainTestCase(unittest.TestCase):

    def test_expression(self):
        self.assertEqual("id\n", execute("-e", "id (x) x main () (id id)"))

    def test_file(self):
        self.assertEqual("K\n", execute(os.path.join(EXAMPLES, "ski.eq")))

    def test_show_and_dump(self):
        output = execute("-s", "-d", "-e", "id (x) x main () (id id)")
        self.assertEqual("id x = x;\nmain = (id id);\n\nid/1: x\nmain/0: @ id id\n\nid\n", output)

    def test_max_steps(self):
        output = execute("-n", "20", os.path.join(EXAMPLES, "omega.eq"))
        self.assertIn("warning: ", output)
        self.assertTrue(output.endswith("(w w)\n"))

    def test_errors(self):
        cases = ["main = y;", "main = ;", "a = a;"]
        for case in cases:
            with self.assertRaises(SystemExit, msg=case) as context:
                execute("-e", case)
            self.assertEqual(1, context.exception.code, case)

        with self.assertRaises(SystemExit):
            execute(os.path.join(EXAMPLES, "missing.eq"))


if __name__ == '__main__':
    unittest.main()
