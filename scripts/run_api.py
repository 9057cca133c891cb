import subprocess
import sys
import os
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from tour_pricing.config.settings import get_settings


def main():
    project_root = Path(__file__).parent.parent
    os.chdir(project_root)
    settings = get_settings()

    # Ensure src is in python path
    env = os.environ.copy()
    if "PYTHONPATH" in env:
        env["PYTHONPATH"] = f"{src_path}{os.pathsep}{env['PYTHONPATH']}"
    else:
        env["PYTHONPATH"] = str(src_path)

    print(f"Starting Tour Pricing API (FastAPI), catalog: {settings.data_file}")
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "tour_pricing.api.main:create_app",
            "--factory",
            "--host", settings.api_host,
            "--port", str(settings.api_port),
            "--log-level", settings.log_level.lower(),
            "--reload"
        ], env=env)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
