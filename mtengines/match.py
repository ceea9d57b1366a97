"""
MT Match

A machine translation result for a single XLIFF segment.
"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, Any

from .xml_utils import to_string, to_xml_element


@dataclass(frozen=True)
class MTMatch:
    """Source element, translated target element and the engine that produced it"""
    source: ET.Element
    target: ET.Element
    origin: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with serialized XML"""
        return {
            "source": to_string(self.source),
            "target": to_string(self.target),
            "origin": self.origin,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MTMatch":
        """Create from dictionary"""
        return cls(
            source=to_xml_element(data["source"]),
            target=to_xml_element(data["target"]),
            origin=data["origin"],
        )
