"""
CLI command to write a starter router configuration
"""

from pathlib import Path

from .config_discovery import LOCAL_CONFIG_NAME
from .config_template import MINIMAL_CONFIG_TEMPLATE


def write_config_template(config_path: Path, force: bool = False) -> None:
    """
    Write the configuration template, creating parent directories

    Raises:
        FileExistsError: If the file exists and force is False
        OSError: If the directory or file cannot be written
    """
    if config_path.exists() and not force:
        raise FileExistsError(str(config_path))

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(MINIMAL_CONFIG_TEMPLATE, encoding='utf-8')


def run_init_command(force: bool = False, path: str = None) -> int:
    """
    Generate a configuration file in current directory or custom path

    Args:
        force: If True, overwrite existing config file
        path: Custom path for config file. If None, creates ./runaround.yaml

    Returns:
        Exit code (0 = success, 1 = error)
    """
    config_path = Path(path or LOCAL_CONFIG_NAME).resolve()

    try:
        write_config_template(config_path, force=force)
    except FileExistsError:
        print(f"❌ Config already exists: {config_path}")
        print("   Use --force to overwrite")
        return 1
    except OSError as e:
        print(f"❌ Failed to write config file: {config_path}")
        print(f"   Error: {e}")
        return 1

    print(f"✅ Config created: {config_path}")
    print("\nNext steps:")
    print("  1. Adjust the resolution ladder or lane spacing if needed:")
    print(f"     nano {config_path}")
    print("\n  2. Route a project:")
    print("     runaround route layout.json")

    return 0
