import contextlib
import io
import logging
import tempfile
import unittest
from pathlib import Path

from audio_tagedit.cli import (
    LEVEL_COLORS,
    LOG_FORMAT,
    ColorFormatter,
    build_parser,
    build_request,
    configure_logging,
    main,
)
from audio_tagedit.commands import doctor as cmd_doctor
from audio_tagedit.commands import show as cmd_show
from audio_tagedit.config import Settings
from audio_tagedit.models import MediaFileRecord

from audio_fixtures import make_mp3


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config = self.tmp / "config.yaml"
        self.config.write_text(
            f"index:\n  path: {self.tmp / 'index.sqlite3'}\nlogging:\n  level: ERROR\n",
            encoding="utf-8",
        )
        self.track = make_mp3(
            self.tmp / "music" / "Kraftwerk" / "Radio-Activity" / "03.mp3",
            TPE1="Kraftwerk",
            TALB="Radio-Activity",
            TIT2="Airwaves",
            TDRC="1975",
            TCON="Electronic",
            TRCK="3",
        )

    def tearDown(self) -> None:
        logging.getLogger().handlers.clear()
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple[str, int]:
        out = io.StringIO()
        code = 0
        with contextlib.redirect_stdout(out):
            try:
                main(["--config", str(self.config), *argv])
            except SystemExit as exc:
                code = exc.code if isinstance(exc.code, int) else 1
        return out.getvalue(), code

    def test_register_show_and_edit(self) -> None:
        output, code = self._run("register", str(self.track))
        self.assertEqual(code, 0)
        media_id = output.split("\t", 1)[0]

        output, _ = self._run("show", media_id)
        self.assertIn("Airwaves", output)
        self.assertIn("1975", output)

        output, code = self._run("edit", media_id, "--genre", "Krautrock", "--keep-unset")
        self.assertEqual((output.strip(), code), ("UPDATED", 0))

        output, code = self._run("edit", media_id, "--genre", "Krautrock", "--keep-unset")
        self.assertEqual((output.strip(), code), ("SKIPPED", 0))

        output, _ = self._run("show", media_id)
        self.assertIn("Krautrock", output)
        self.assertIn("Radio-Activity", output)

    def test_edit_without_keep_unset_clears_omitted_fields(self) -> None:
        output, _ = self._run("register", str(self.track))
        media_id = output.split("\t", 1)[0]
        output, code = self._run("edit", media_id, "--title", "Airwaves", "--dry-run")
        self.assertEqual(code, 0)
        self.assertIn("artist: 'Kraftwerk' -> None", output)
        self.assertNotIn("title", output)

    def test_edit_unknown_id_fails(self) -> None:
        output, code = self._run("edit", "42", "--genre", "Rock")
        self.assertEqual(code, 1)
        self.assertEqual(output.strip(), "Media file 42 not found.")

    def test_doctor(self) -> None:
        output, code = self._run("doctor")
        self.assertEqual(code, 0)
        self.assertIn("Index: OK", output)
        self.assertIn("Codec mp3: ENABLED", output)

    def test_build_request_keeps_current_values(self) -> None:
        args = build_parser().parse_args(["edit", "7", "--genre", "Rock"])
        current = MediaFileRecord(id=7, path=Path("/m/a.mp3"), artist="A", track_number=2, year=1999)
        request = build_request(args, current)
        self.assertEqual(request.file_id, 7)
        self.assertEqual(request.genre, "Rock")
        self.assertEqual(request.artist, "A")
        self.assertEqual(request.track, "2")
        self.assertEqual(request.year, "1999")
        self.assertIsNone(request.album)
        self.assertIsNone(build_request(args).artist)


class TestShowRender(unittest.TestCase):
    def test_absent_values_render_as_dash(self) -> None:
        record = MediaFileRecord(id=5, path=Path("/m/a/01.mp3"), parent_id=2, genre="17", track_number=0)
        lines = cmd_show.render(record)
        self.assertEqual(lines[0], "[5] /m/a/01.mp3 (file)")
        self.assertIn("  parent        2", lines)
        self.assertIn("  track_number  0", lines)
        self.assertIn("  genre         17", lines)
        self.assertIn("  album         -", lines)

    def test_check_line(self) -> None:
        self.assertEqual(cmd_doctor.check_line("Codec mp3", "ENABLED"), "Codec mp3: ENABLED")
        self.assertEqual(
            cmd_doctor.check_line("Index", "ERROR", "locked"), "Index: ERROR (locked)"
        )


class TestConfigureLogging(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in list(root.handlers):
            handler.close()
        root.handlers.clear()
        self._tmp.cleanup()

    def test_warnings_go_to_the_configured_file(self) -> None:
        warnings_log = self.tmp / "logs" / "warnings.log"
        settings = Settings.model_validate(
            {"logging": {"level": "debug", "warnings_log": str(warnings_log)}}
        )
        with contextlib.redirect_stderr(io.StringIO()):
            configure_logging(settings, None)
            root = logging.getLogger()
            self.assertEqual(root.level, logging.DEBUG)
            self.assertIsInstance(root.handlers[0].formatter, ColorFormatter)
            logging.getLogger("audio_tagedit.test").info("not in the file")
            logging.getLogger("audio_tagedit.test").warning("Illegal year: abc")
        for handler in root.handlers:
            handler.flush()
        content = warnings_log.read_text(encoding="utf-8")
        self.assertIn("W | audio_tagedit.test | Illegal year: abc", content)
        self.assertNotIn("not in the file", content)

    def test_command_line_level_overrides_settings(self) -> None:
        configure_logging(Settings(), "error")
        self.assertEqual(logging.getLogger().level, logging.ERROR)
        self.assertEqual(logging.getLogger("mutagen").level, logging.WARNING)

    def test_color_formatter_wraps_known_levels(self) -> None:
        formatter = ColorFormatter(LOG_FORMAT)
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        rendered = formatter.format(record)
        self.assertTrue(rendered.startswith(LEVEL_COLORS[logging.WARNING]))
        self.assertIn("W | x | careful", rendered)


if __name__ == "__main__":
    unittest.main()
