#!/usr/bin/env python3
"""
Development startup script.
Creates the backend virtualenv, installs the package and launches the API.

Usage: python dev.py [--no-install]
"""

import shutil
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).parent
BACKEND = ROOT / "backend"


def run(cmd, cwd=None, check=True):
    """Run a command and return the result."""
    print(f"\n> {cmd}")
    return subprocess.run(cmd, shell=True, cwd=cwd, check=check)


def setup_backend(install=True):
    """Create the venv, install the project and seed .env."""
    print("\n=== Setting up backend ===")

    venv_path = ROOT / "venv"
    if not venv_path.exists():
        print("Creating virtual environment...")
        run(f'"{sys.executable}" -m venv venv', cwd=ROOT)

    if sys.platform == "win32":
        python = venv_path / "Scripts" / "python"
    else:
        python = venv_path / "bin" / "python"

    if install:
        print("Installing dependencies...")
        run(f'"{python}" -m pip install -e ".[test]"', cwd=ROOT)

    env_file = BACKEND / ".env"
    env_example = ROOT / ".env.example"
    if not env_file.exists() and env_example.exists():
        print("Creating .env from .env.example...")
        shutil.copy(env_example, env_file)

    return python


def main():
    print("=" * 50)
    print("Beam Drill - Development Server")
    print("=" * 50)

    python = setup_backend(install="--no-install" not in sys.argv)

    print("\nBackend:  http://localhost:8000")
    print("API Docs: http://localhost:8000/docs")
    print("\nPress Ctrl+C to stop\n")

    try:
        run(f'"{python}" -m uvicorn beamdrill.main:app --reload', cwd=BACKEND, check=False)
    except KeyboardInterrupt:
        print("\n\nShutting down...")


if __name__ == "__main__":
    main()
