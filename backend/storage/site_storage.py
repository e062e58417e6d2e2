"""
Static site output storage.

Provides a simple interface for writing the generated pages.
Currently uses the local filesystem.
"""
import shutil
from pathlib import Path
from typing import Optional, Union

from domain.models import DEFAULT_LANGUAGE, Language


class SiteStorage:
    """
    Local output directory for a built site.

    Files are organized as:
    - index.html, 404.html                    - default language
    - {location_id}/index.html               - default language location pages
    - {lang}/index.html, {lang}/{location_id}/index.html - other languages
    - data/locations.json                    - machine-readable dataset export
    """

    def __init__(self, output_root: Union[str, Path] = "build"):
        self.output_root = Path(output_root)
        self.output_root.mkdir(parents=True, exist_ok=True)

    def language_dir(self, language: Language) -> Path:
        """Get the directory holding a language's pages."""
        if language == DEFAULT_LANGUAGE:
            return self.output_root
        return self.output_root / language.value

    def page_file(self, language: Language, location_id: Optional[str] = None) -> Path:
        """Get the index.html path for the landing page or a location page."""
        base = self.language_dir(language)
        if location_id:
            base = base / location_id
        return base / "index.html"

    def write_text(self, relative_path: Union[str, Path], content: str) -> Path:
        """Write a text file below the output root. Returns the absolute path."""
        path = self.output_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def write_page(self, language: Language, content: str, location_id: Optional[str] = None) -> Path:
        path = self.page_file(language, location_id)
        return self.write_text(path.relative_to(self.output_root), content)

    def file_exists(self, relative_path: Union[str, Path]) -> bool:
        """Check if a file exists."""
        return (self.output_root / relative_path).exists()

    def clean(self) -> bool:
        """Delete everything below the output root. Returns True if anything was removed."""
        removed = False
        for child in self.output_root.iterdir():
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()
            removed = True
        return removed
