import os
import subprocess
import sys
from PIL import Image

ICON_PNG = "resources/icon.png"
ICON_ICO = "resources/icon.ico"


def prepare_icon():
    """Convert the PNG icon to ICO; returns the ICO path or None."""
    if not os.path.exists(ICON_PNG):
        print("Warning: icon.png not found in resources/")
        return None
    try:
        img = Image.open(ICON_PNG)
        img.save(ICON_ICO, format='ICO', sizes=[(256, 256)])
        print(f"Converted {ICON_PNG} to {ICON_ICO}")
        return ICON_ICO
    except OSError as e:
        print(f"Warning: Could not convert icon: {e}")
        return None


def nuitka_command(icon_ico=None):
    cmd = [
        sys.executable, "-m", "nuitka",
        "--standalone",
        "--enable-plugin=pyqt6",
        "--windows-console-mode=disable",
        "--lto=yes",
        "--deployment",
        "--show-progress",
        "--output-dir=build",
        "--output-filename=BorrowerDesk",
        "--include-package=borrowerdesk",
        "borrowerdesk_app.py"
    ]
    if os.path.isdir("resources"):
        cmd.insert(-1, "--include-data-dir=resources=resources")
    if icon_ico and os.path.exists(icon_ico):
        cmd.append(f"--windows-icon-from-ico={icon_ico}")
    return cmd


def build():
    print("Initializing BorrowerDesk Build Sequence...")
    cmd = nuitka_command(prepare_icon())

    print("\nExecuting Nuitka Build Command:")
    print(" ".join(cmd))
    print("\nThis process may take several minutes...")

    try:
        subprocess.check_call(cmd)
        print("\nBUILD SUCCESSFUL!")
        print(f"Artifacts located in: {os.path.abspath('build/borrowerdesk_app.dist')}")
    except subprocess.CalledProcessError as e:
        print(f"\nBUILD FAILED with Code {e.returncode}")
        sys.exit(1)


if __name__ == "__main__":
    build()
