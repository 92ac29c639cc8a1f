"""
PE Resource Reader

Reads raw resources from a Windows PE file (language .dll) with pefile.

Resource tree: type -> resource id -> language -> data entry.
String tables are type 6 (RT_STRING); their resource id is the block number.
"""

from typing import Iterator, Tuple

import pefile

from ..errors import LoadError

RT_STRING = pefile.RESOURCE_TYPE['RT_STRING']

_RESOURCE_DIRECTORY = pefile.DIRECTORY_ENTRY['IMAGE_DIRECTORY_ENTRY_RESOURCE']


class PEResources:
    """
    Resource tree of a PE file.

    Usage:
        resources = PEResources(dll_bytes)
        for block_id, data in resources.iter_resources(RT_STRING):
            ...
    """

    def __init__(self, data: bytes):
        """
        Args:
            data: Contents of the PE file

        Raises:
            LoadError: if the file is not a PE file or has no resources
        """
        try:
            self._pe = pefile.PE(data=data, fast_load=True)
            self._pe.parse_data_directories(directories=[_RESOURCE_DIRECTORY])
        except pefile.PEFormatError as e:
            raise LoadError(f"Not a valid PE file: {e}") from e

        if not hasattr(self._pe, 'DIRECTORY_ENTRY_RESOURCE'):
            raise LoadError("PE file has no resources")

    def iter_resources(self, resource_type: int) -> Iterator[Tuple[int, bytes]]:
        """
        Iterate (resource id, data) for every resource of a type, all languages.

        Named resources are skipped.
        """
        for type_entry in self._pe.DIRECTORY_ENTRY_RESOURCE.entries:
            if type_entry.id != resource_type or not hasattr(type_entry, 'directory'):
                continue
            for entry in type_entry.directory.entries:
                if entry.id is None or not hasattr(entry, 'directory'):
                    continue
                for language in entry.directory.entries:
                    if not hasattr(language, 'data'):
                        continue
                    yield entry.id, self._read_data(language.data.struct)

    def _read_data(self, data_entry) -> bytes:
        try:
            data = self._pe.get_data(data_entry.OffsetToData, data_entry.Size)
        except pefile.PEFormatError as e:
            raise LoadError(f"Malformed resource data entry: {e}") from e
        if len(data) != data_entry.Size:
            raise LoadError(f"Resource data at RVA 0x{data_entry.OffsetToData:X} "
                            f"runs past the end of the file")
        return data
