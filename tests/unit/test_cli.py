"""
CLI Unit Tests
Tests for hashtree_cli/main.py and the subcommands.

Commands are driven through main(argv) and their stdout captured.
"""
import json

import pytest

from hashtree.merkle import build
from hashtree_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
)


WORDS = ["hello", "world", "this", "is", "merkle", "tree"]


def _blobs(words=WORDS):
    return [w.encode() for w in words]


@pytest.fixture
def proof_file(isolated_env):
    """A proof document for "this" (index 2) written by the prove command."""
    path = isolated_env / "proof.json"
    assert main(["prove", *WORDS, "--index", "2", "--out", str(path)]) == EXIT_SUCCESS
    return path


class TestParser:
    """Tests for top-level argument handling."""

    def test_no_command_prints_help(self, isolated_env, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "hashtree 0.1.0" in capsys.readouterr().out

    def test_negative_index_rejected(self, isolated_env):
        with pytest.raises(SystemExit):
            main(["prove", "a", "--index", "-1"])

    def test_bad_config_file(self, isolated_env, capsys):
        (isolated_env / "bad.json").write_text(json.dumps({"root_form": "sideways"}))

        assert main(["--config", str(isolated_env / "bad.json"), "demo"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err


class TestDemoCommand:
    """Tests for the demo command."""

    def test_demo_output(self, isolated_env, capsys):
        assert main(["demo"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"Root hash: {build(_blobs()).root_hash()}" in out
        assert "Proof for first leaf:" in out
        assert "Verification result: True" in out

    def test_demo_json(self, isolated_env, capsys):
        assert main(["demo", "--json"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        tree = build(_blobs())
        assert data["root_hash"] == tree.root_hash()
        assert data["proof"] == [s.hex() for s in tree.generate_proof(0)]
        assert data["verified"] is True


class TestRootCommand:
    """Tests for the root command."""

    def test_display_root(self, isolated_env, capsys):
        assert main(["root", *WORDS]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "leaves: 6" in out
        assert "depth: 3" in out
        assert f"root (display): {build(_blobs()).root_hash()}" in out

    def test_raw_root_json(self, isolated_env, capsys):
        assert main(["root", "--raw", "--json", *WORDS]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data == {
            "leaf_count": 6,
            "depth": 3,
            "root_form": "raw",
            "root": build(_blobs()).raw_root_hash(),
        }

    def test_root_form_from_env(self, isolated_env, monkeypatch, capsys):
        monkeypatch.setenv("HASHTREE_ROOT_FORM", "raw")
        monkeypatch.setenv("HASHTREE_OUTPUT_FORMAT", "json")

        assert main(["root", "a", "b"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["root"] == build([b"a", b"b"]).raw_root_hash()

    def test_empty_tree(self, isolated_env, capsys):
        assert main(["root"]) == EXIT_SUCCESS
        assert "(empty tree)" in capsys.readouterr().out

    def test_files(self, isolated_env, capsys):
        paths = []
        for i, content in enumerate([b"\x00\x01binary", b"second file"]):
            path = isolated_env / f"blob{i}.bin"
            path.write_bytes(content)
            paths.append(str(path))

        assert main(["root", "--files", "--json", *paths]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["root"] == build([b"\x00\x01binary", b"second file"]).root_hash()

    def test_missing_file(self, isolated_env, capsys):
        assert main(["root", "--files", "missing.bin"]) == EXIT_RUNTIME_ERROR
        assert "Input file not found" in capsys.readouterr().err


class TestProveCommand:
    """Tests for the prove command."""

    def test_prove_to_stdout(self, isolated_env, capsys):
        assert main(["prove", *WORDS, "--index", "0"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        tree = build(_blobs())
        assert data["leaf_index"] == 0
        assert data["leaf_count"] == 6
        assert data["root"] == "0x" + tree.raw_root_hash()
        assert len(data["siblings"]) == tree.depth

    def test_prove_to_file(self, proof_file):
        data = json.loads(proof_file.read_text())
        assert data["leaf_index"] == 2

    def test_prove_out_of_range(self, isolated_env, capsys):
        assert main(["prove", *WORDS, "--index", "6"]) == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err


class TestVerifyCommand:
    """Tests for the verify command."""

    def test_valid_proof(self, proof_file, capsys):
        capsys.readouterr()
        assert main(["verify", str(proof_file), "this"]) == EXIT_SUCCESS
        assert "proof_ok: true" in capsys.readouterr().out

    def test_wrong_leaf(self, proof_file, capsys):
        capsys.readouterr()
        assert main(["verify", str(proof_file), "that"]) == EXIT_VERIFICATION_FAILED
        assert "proof_ok: false" in capsys.readouterr().out

    def test_display_root_check(self, proof_file, capsys):
        display = build(_blobs()).root_hash()
        capsys.readouterr()

        assert main(["verify", str(proof_file), "this", "--display-root", display, "--json"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["proof_ok"] is True
        assert data["display_root_ok"] is True

    def test_display_root_mismatch(self, proof_file, capsys):
        other = build([b"other"]).root_hash()
        capsys.readouterr()

        assert main(["verify", str(proof_file), "this", "--display-root", other, "--json"]) == EXIT_VERIFICATION_FAILED

        data = json.loads(capsys.readouterr().out)
        assert data["proof_ok"] is True
        assert data["display_root_ok"] is False

    def test_leaf_from_file(self, isolated_env, capsys):
        leaf = isolated_env / "leaf.bin"
        leaf.write_bytes(b"\xffpayload")
        other = isolated_env / "other.bin"
        other.write_bytes(b"other")
        proof_path = isolated_env / "file-proof.json"

        assert main(["prove", "--files", str(other), str(leaf), "--index", "1", "--out", str(proof_path)]) == EXIT_SUCCESS
        assert main(["verify", "--file", str(proof_path), str(leaf)]) == EXIT_SUCCESS

    def test_missing_proof(self, isolated_env, capsys):
        assert main(["verify", "nope.json", "this"]) == EXIT_RUNTIME_ERROR
        assert "Proof not found" in capsys.readouterr().err

    def test_malformed_proof(self, isolated_env, capsys):
        path = isolated_env / "bad.json"
        path.write_text(json.dumps({"leaf_index": 0}))

        assert main(["verify", str(path), "this"]) == EXIT_RUNTIME_ERROR
        assert "Invalid proof document" in capsys.readouterr().err


class TestConfigCommand:
    """Tests for the config command."""

    def test_init_and_show(self, isolated_env, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (isolated_env / "hashtree.json").exists()

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

        capsys.readouterr()
        assert main(["config", "--show"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["root_form"] == "display"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
