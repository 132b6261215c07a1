import tempfile
import unittest
from pathlib import Path

from audio_tagedit.fs_utils import atomic_rewrite, safe_stat


class TestAtomicRewrite(unittest.TestCase):
    def test_replaces_original_on_success(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            path = tmp / "01.flac"
            path.write_bytes(b"old")
            with atomic_rewrite(path) as staging:
                self.assertEqual(staging.read_bytes(), b"old")
                self.assertEqual(staging.suffix, ".flac")
                staging.write_bytes(b"new")
                self.assertEqual(path.read_bytes(), b"old")
            self.assertEqual(path.read_bytes(), b"new")
            self.assertEqual([p.name for p in tmp.iterdir()], ["01.flac"])

    def test_keeps_original_and_cleans_up_on_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            path = tmp / "01.flac"
            path.write_bytes(b"old")
            with self.assertRaises(RuntimeError):
                with atomic_rewrite(path) as staging:
                    staging.write_bytes(b"half")
                    raise RuntimeError("boom")
            self.assertEqual(path.read_bytes(), b"old")
            self.assertEqual([p.name for p in tmp.iterdir()], ["01.flac"])

    def test_preserves_permissions(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "01.flac"
            path.write_bytes(b"old")
            path.chmod(0o644)
            with atomic_rewrite(path) as staging:
                staging.write_bytes(b"new")
            self.assertEqual(path.stat().st_mode & 0o777, 0o644)


class TestSafeStat(unittest.TestCase):
    def test_missing_file(self) -> None:
        self.assertIsNone(safe_stat(Path("/this/path/does/not/exist")))

    def test_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "x"
            path.write_bytes(b"abc")
            self.assertEqual(safe_stat(path).st_size, 3)


if __name__ == "__main__":
    unittest.main()
