from contextlib import redirect_stdout
import io
import os
import unittest

from equation.lang.error import DuplicateName, ErrorHandler, GenericException, MissingEntryPoint
from equation.lang.session import Session
from equation.pure.reducer import Status

EXAMPLES = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "examples")


def session(*args, **kwargs):
    return Session(ErrorHandler(fatal=False), Session.EXPR_FILE, *args, **kwargs)


class SessionTestCase(unittest.TestCase):

    def test_run(self):
        sess = session()
        sess.add("id (x) x\nmain () (id id)")
        state = sess.run()

        self.assertEqual(Status.NORMAL_FORM, state.status)
        self.assertEqual(["id"], sess.results)
        self.assertEqual("id", sess.pop())
        self.assertEqual([], sess.results)

    def test_examples(self):
        cases = {
            "ski.eq": "K",
            "booleans.eq": "true",
        }
        for case, expected in cases.items():
            sess = session()
            sess.load(os.path.join(EXAMPLES, case))
            sess.run()
            self.assertEqual(expected, sess.pop(), case)

    def test_load_missing_file(self):
        self.assertRaises(GenericException, session().load, os.path.join(EXAMPLES, "missing.eq"))

    def test_duplicates(self):
        sess = session()
        sess.add("I x = x; main = I; I y = y;")
        self.assertRaises(DuplicateName, sess.run)

        sess = session(cmd_line=True)
        sess.add("I x = x; main = I;")
        sess.add("I y = main;")
        self.assertEqual(["main", "I"], [definition.name for definition in sess.definitions])
        self.assertEqual("main = I;\nI y = main;", sess.show())

    def test_missing_main(self):
        sess = session()
        sess.add("-- just a comment\n")
        self.assertRaises(MissingEntryPoint, sess.run)

    def test_evaluate(self):
        sess = session()
        sess.add("I x = x; K x y = x; main = I;")

        cases = {"K I K": "I", "K K I": "K", "I (K I)": "(K I)"}
        for case, expected in cases.items():
            sess.evaluate(case)
            self.assertEqual(expected, sess.pop(), case)

        self.assertEqual(3, len(sess.definitions))  # main is left untouched

    def test_warnings(self):
        cases = {
            "x = x; k x = x; main = k;": "shadowed",
            "w x = x x; main = w w;": "no normal form within 5 steps",
        }
        for case, expected in cases.items():
            sess = session(max_steps=5)
            sess.add(case)

            output = io.StringIO()
            with redirect_stdout(output):
                sess.run()
            self.assertIn("warning: ", output.getvalue(), case)
            self.assertIn(expected, output.getvalue(), case)

    def test_trace(self):
        sess = session(trace=True)
        sess.add("id (x) x\nmain () (id id)")

        output = io.StringIO()
        with redirect_stdout(output):
            state = sess.run()

        lines = output.getvalue().splitlines()
        self.assertEqual(state.steps + 1, len(lines))
        self.assertTrue(lines[0].endswith("main"))
        self.assertTrue(lines[1].endswith("(id id)"))
        self.assertIn("id", lines[2])

    def test_dump(self):
        sess = session()
        sess.add("id (x) x\nmain () (id id)")
        self.assertEqual("id/1: x\nmain/0: @ id id", sess.dump())


if __name__ == '__main__':
    unittest.main()
