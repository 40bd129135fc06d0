"""
p16run command-line driver tests: output routing and exit status.
"""
import sys
import os
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

import pytest
import p16run

EXAMPLES_DIR = os.path.join(ROOT, "examples")
SUM = os.path.join(EXAMPLES_DIR, "sum.txt")
SUM_DATA = os.path.join(EXAMPLES_DIR, "sum_data.txt")


def _write(tmp_path, name, *lines):
    p = tmp_path / name
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(p)


class TestRun:
    def test_sum_to_stdout(self, capsys):
        assert p16run.main([SUM, "-d", SUM_DATA]) == p16run.EXIT_OK
        out = capsys.readouterr().out
        assert "WRITE OUTPUT      12 0000000000001100" in out

    def test_output_file(self, tmp_path):
        out = tmp_path / "out.txt"
        assert p16run.main([SUM, "-d", SUM_DATA, "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "WRITE OUTPUT      12 0000000000001100\n"

    def test_dump(self, capsys):
        assert p16run.main([SUM, "-d", SUM_DATA, "--dump"]) == 0
        assert "MACHINE IS NOW" in capsys.readouterr().out

    def test_listing_does_not_run(self, capsys):
        assert p16run.main([SUM, "--listing"]) == 0
        out = capsys.readouterr().out
        assert "STC   1" in out
        assert "WRITE OUTPUT" not in out

    def test_log_file_has_trace(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        assert p16run.main([SUM, "-d", SUM_DATA, "-o", str(tmp_path / "o.txt"),
                            "--log-file", str(log_file)]) == 0
        text = log_file.read_text(encoding="utf-8")
        assert "EXECUTE" in text
        assert "MACHINE IS NOW" in text


class TestExitStatus:
    def test_rd_without_data(self, tmp_path, capsys):
        prog = _write(tmp_path, "p.txt", "1110000000000001", "1110000000000011")
        assert p16run.main([prog]) == p16run.EXIT_FAULT
        captured = capsys.readouterr()
        assert "Machine fault" in captured.err
        assert "WRITE OUTPUT" not in captured.out

    def test_missing_program(self, tmp_path):
        assert p16run.main([str(tmp_path / "nope.txt")]) == p16run.EXIT_FAULT

    def test_bad_program_line(self, tmp_path):
        prog = _write(tmp_path, "p.txt", "1110000000000010", "hello")
        assert p16run.main([prog]) == p16run.EXIT_FAULT

    def test_step_limit(self, tmp_path):
        prog = _write(tmp_path, "loop.txt", "1010000000000000", "1100000000000000")
        assert p16run.main([prog, "--max-steps", "5"]) == p16run.EXIT_STEP_LIMIT

    def test_strict_zero(self, tmp_path):
        prog = _write(tmp_path, "p.txt", "1010000000000000")
        assert p16run.main([prog]) == 0
        assert p16run.main([prog, "--strict-zero"]) == p16run.EXIT_FAULT

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            p16run.main(["--version"])
        assert exc.value.code == 0
        assert "p16run" in capsys.readouterr().out
