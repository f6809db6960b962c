"""vCard reader for contact directories."""
import logging
from pathlib import Path
from typing import List

import vobject
from vobject.base import Component, ContentLine, ParseError

from processor.errors import ContactParseError
from processor.models import Contact, Property

logger = logging.getLogger(__name__)


class VcardReader:
    """Reader for ``.vcf`` files in a single directory."""

    EXTENSION = '.vcf'

    def __init__(self, input_dir):
        """
        Initialize the reader.

        Args:
            input_dir: Directory containing vCard files
        """
        self.input_dir = Path(input_dir)

    def list_files(self) -> List[Path]:
        """
        List vCard files in the input directory, sorted by name.

        Subdirectories are not descended into.

        Raises:
            OSError: If the input directory cannot be listed
        """
        files = []
        for path in sorted(self.input_dir.iterdir()):
            is_vcard = path.suffix == self.EXTENSION
            logger.debug(
                f"Found entry \"{path}\", is file: {path.is_file()}, "
                f"ends with {self.EXTENSION}: {is_vcard}"
            )
            if path.is_file() and is_vcard:
                files.append(path)
        return files

    def read_contacts(self, path: Path) -> List[Contact]:
        """
        Parse all contacts of a vCard file.

        Values are plain strings as decoded by vobject, without conversion
        to native types, and parameters keep their original order.

        Args:
            path: vCard file

        Returns:
            List of contacts in file order

        Raises:
            ContactParseError: If the file is not valid vCard text
        """
        try:
            text = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ContactParseError(str(path), str(e)) from e

        try:
            components = list(vobject.readComponents(text, transform=False))
        except ParseError as e:
            raise ContactParseError(str(path), str(e)) from e

        contacts = [self._to_contact(component) for component in components]
        logger.info(f"Read {len(contacts)} contacts from {path.name}")
        return contacts

    def _to_contact(self, component: Component) -> Contact:
        properties = []
        for child in component.getChildren():
            if not isinstance(child, ContentLine):
                logger.debug(f"Skipping nested component {child.name}")
                continue
            properties.append(self._to_property(child))
        return Contact(properties=properties)

    @staticmethod
    def _to_property(line: ContentLine) -> Property:
        params = None
        if line.params:
            params = {name: list(values) for name, values in line.params.items()}
        return Property(name=line.name, params=params, value=line.value)
