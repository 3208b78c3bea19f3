"""Profile files: shapes stored as JSON documents.

A profile document looks like::

    {"format": "blueprint2d", "version": 1, "shape": {"type": "blueprint", ...}}

A document whose shape is null stores the empty shape. A bare shape
dictionary (without the envelope) is accepted on read.
"""

import json
from pathlib import Path
from typing import Any

from blueprint2d.domain import Shape2D, shape_from_dict
from blueprint2d.exceptions import BlueprintError, ProfileLoadError, ProfileSaveError

PROFILE_FORMAT = "blueprint2d"
PROFILE_VERSION = 1


def shape_to_document(shape: Shape2D) -> dict[str, Any]:
    """Wrap a shape in a versioned profile document."""
    return {
        "format": PROFILE_FORMAT,
        "version": PROFILE_VERSION,
        "shape": shape.to_dict() if shape is not None else None,
    }


def document_to_shape(document: dict[str, Any]) -> Shape2D:
    """Extract the shape from a profile document or a bare shape dictionary.

    Raises:
        InvalidBlueprintError: If the shape data is malformed
        ValueError: If the document has an unsupported format or version
    """
    if "format" not in document:
        return shape_from_dict(document)
    if document["format"] != PROFILE_FORMAT:
        raise ValueError(f"unsupported format {document['format']!r}")
    if document.get("version") != PROFILE_VERSION:
        raise ValueError(f"unsupported version {document.get('version')!r}")
    return shape_from_dict(document.get("shape"))


class ProfileReader:
    """Loads shapes from profile files.

    Example:
        reader = ProfileReader(Path("part.json"))
        shape = reader.load()
    """

    def __init__(self, path: Path) -> None:
        """Initialize the profile reader.

        Args:
            path: Path to the JSON profile file
        """
        self._path = path
        self._shape: Shape2D = None
        self._loaded = False

    def load(self) -> Shape2D:
        """Load and parse the profile file.

        Returns:
            The stored shape (None for the empty shape)

        Raises:
            ProfileLoadError: If the file is missing, not JSON, or not a profile
        """
        if not self._path.exists():
            raise ProfileLoadError(str(self._path), "file not found")

        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ProfileLoadError(str(self._path), str(e)) from e

        if not isinstance(document, dict):
            raise ProfileLoadError(str(self._path), "top level value must be an object")

        try:
            self._shape = document_to_shape(document)
        except (BlueprintError, ValueError) as e:
            raise ProfileLoadError(str(self._path), str(e)) from e

        self._loaded = True
        return self._shape

    @property
    def shape(self) -> Shape2D:
        """The loaded shape.

        Raises:
            RuntimeError: If the profile has not been loaded yet
        """
        if not self._loaded:
            raise RuntimeError("Profile not loaded. Call load() first.")
        return self._shape


class ProfileWriter:
    """Saves shapes as profile files.

    Example:
        writer = ProfileWriter(Path("result.json"))
        writer.save(shape)
    """

    def __init__(self, path: Path, indent: int | None = 2) -> None:
        """Initialize the profile writer.

        Args:
            path: Destination path
            indent: JSON indentation, None for compact output
        """
        self._path = path
        self._indent = indent

    def save(self, shape: Shape2D) -> None:
        """Write the shape to the destination path.

        Raises:
            ProfileSaveError: If the file cannot be written
        """
        text = json.dumps(shape_to_document(shape), indent=self._indent)
        try:
            self._path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise ProfileSaveError(str(self._path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path, operation: str, suffix: str = ".json") -> Path:
        """Generate an output path named after the input and the operation.

        Converts: part.json -> part-fuse.json

        Args:
            input_path: Path of the first operand
            operation: Name of the operation applied
            suffix: Extension of the output file

        Returns:
            Path next to the input file
        """
        return input_path.parent / f"{input_path.stem}-{operation}{suffix}"
