#!/usr/bin/env python3
"""Validate garage YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_garage_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single garage YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.load(f, Loader=yaml.SafeLoader)
        data = _stringify_dates(data)
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def _stringify_dates(value):
    """Turn unquoted YAML dates into ISO strings, as the loader does."""
    if isinstance(value, dict):
        return {k: _stringify_dates(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_dates(v) for v in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def main(argv=None):
    """Validate the given garage files, or every YAML file in garages/."""
    schema = load_schema()
    paths = [Path(p) for p in (sys.argv[1:] if argv is None else argv)]

    if not paths:
        garages_dir = Path(__file__).parent / "garages"
        if not garages_dir.exists():
            print(f"Error: garages directory not found: {garages_dir}")
            return 1
        paths = list(garages_dir.glob("*.yaml")) + list(garages_dir.glob("*.yml"))
        if not paths:
            print(f"Warning: No YAML files found in {garages_dir}")
            return 0

    all_valid = True
    for filepath in sorted(paths):
        errors = validate_garage_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
