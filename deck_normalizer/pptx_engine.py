"""python-pptx implementation of the document engine interface."""

from __future__ import annotations

import copy
import gc
import io
import logging
import posixpath
import re
import shutil
import uuid
import zipfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from lxml import etree
from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE, PP_PLACEHOLDER
from pptx.exc import PackageNotFoundError
from pptx.opc.constants import CONTENT_TYPE as CT
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.opc.package import Part
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.parts.slide import SlideLayoutPart
from pptx.util import Pt

from .document import (
    DocumentLayout,
    DocumentPresentation,
    DocumentShape,
    DocumentSlide,
    EditorSession,
)
from .exceptions import DocumentAccessError, SessionError
from .models import (
    DocumentProperties,
    ParagraphSpacing,
    PlaceholderRole,
    SectionInfo,
    ShapeKind,
    StyleTemplate,
)

LOGGER = logging.getLogger(__name__)

# PowerPoint 2010 section list, stored as an extension of presentation.xml.
SECTION_EXT_URI = "{521415D9-36F7-43E2-AB2F-B90AF26B5E84}"
P14_NS = "http://schemas.microsoft.com/office/powerpoint/2010/main"
DEFAULT_SECTION_NAME = "Default Section"

_R_ATTR_PREFIX = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}"
_MIN_LAYOUT_ID = 2147483648

_ROLE_BY_TYPE = {
    PP_PLACEHOLDER.TITLE: PlaceholderRole.TITLE,
    PP_PLACEHOLDER.CENTER_TITLE: PlaceholderRole.TITLE,
    PP_PLACEHOLDER.SUBTITLE: PlaceholderRole.SUBTITLE,
    PP_PLACEHOLDER.BODY: PlaceholderRole.BODY,
    PP_PLACEHOLDER.OBJECT: PlaceholderRole.BODY,
    PP_PLACEHOLDER.SLIDE_NUMBER: PlaceholderRole.SLIDE_NUMBER,
    PP_PLACEHOLDER.FOOTER: PlaceholderRole.FOOTER,
}


def _p14(tag: str) -> str:
    return "{%s}%s" % (P14_NS, tag)


def _placeholder_role(shape) -> Optional[PlaceholderRole]:
    if not shape.is_placeholder:
        return None
    try:
        placeholder_type = shape.placeholder_format.type
    except ValueError:
        return None
    return _ROLE_BY_TYPE.get(placeholder_type, PlaceholderRole.NONE)


def _points(length) -> Optional[float]:
    return None if length is None else float(length.pt)


def _rewrite_runs(text_frame, value: str) -> bool:
    """Write ``value`` over the existing runs character by character.

    Run formatting survives only when ``value`` lines up with the current
    text: same length, same paragraph and line breaks. Returns ``False``
    (nothing written) otherwise.
    """

    current = text_frame.text
    if len(value) != len(current):
        return False
    updates = []
    offset = 0
    for number, paragraph in enumerate(text_frame.paragraphs):
        if number:
            if value[offset:offset + 1] != current[offset:offset + 1]:
                return False
            offset += 1
        for node in paragraph._p.xpath("./a:r | ./a:br | ./a:fld"):
            if node.tag == qn("a:br"):
                if value[offset:offset + 1] != current[offset:offset + 1]:
                    return False
                offset += 1
                continue
            text_node = node.find(qn("a:t"))
            old = "" if text_node is None or text_node.text is None else text_node.text
            if old:
                updates.append((text_node, value[offset:offset + len(old)]))
            offset += len(old)
    if offset != len(current):
        return False
    for text_node, text in updates:
        text_node.text = text
    return True


# ----------------------------------------------------------------------
# Shapes and layouts
# ----------------------------------------------------------------------

class PptxShape(DocumentShape):
    """Adapter around a python-pptx shape."""

    def __init__(self, shape) -> None:
        self._shape = shape

    @property
    def shape_id(self) -> int:
        return self._shape.shape_id

    @property
    def name(self) -> str:
        return self._shape.name

    @property
    def kind(self) -> ShapeKind:
        if self._shape.is_placeholder:
            return ShapeKind.PLACEHOLDER
        try:
            shape_type = self._shape.shape_type
        except NotImplementedError:
            return ShapeKind.OTHER
        return ShapeKind.TEXT_BOX if shape_type == MSO_SHAPE_TYPE.TEXT_BOX else ShapeKind.OTHER

    def placeholder_role(self) -> Optional[PlaceholderRole]:
        return _placeholder_role(self._shape)

    @property
    def placeholder_idx(self) -> Optional[int]:
        if not self._shape.is_placeholder:
            return None
        return self._shape.placeholder_format.idx

    @property
    def has_text_frame(self) -> bool:
        return bool(self._shape.has_text_frame)

    @property
    def text(self) -> Optional[str]:
        if not self._shape.has_text_frame:
            return None
        return self._shape.text_frame.text

    def set_text(self, value: str) -> None:
        text_frame = self._shape.text_frame
        if not _rewrite_runs(text_frame, value):
            text_frame.text = value

    def paragraph_spacing(self) -> ParagraphSpacing:
        if not self._shape.has_text_frame:
            return ParagraphSpacing()
        paragraph = self._shape.text_frame.paragraphs[0]
        line_spacing = paragraph.line_spacing
        return ParagraphSpacing(
            space_before=_points(paragraph.space_before),
            space_after=_points(paragraph.space_after),
            # spacing given in points has no line-multiple equivalent
            line_spacing=line_spacing if isinstance(line_spacing, float) else None,
        )

    def set_paragraph_spacing(self, spacing: ParagraphSpacing) -> None:
        for paragraph in self._shape.text_frame.paragraphs:
            if spacing.space_before is not None:
                paragraph.space_before = Pt(spacing.space_before)
            if spacing.space_after is not None:
                paragraph.space_after = Pt(spacing.space_after)
            if spacing.line_spacing is not None:
                paragraph.line_spacing = spacing.line_spacing

    def set_language(self, language_tag: str) -> None:
        for paragraph in self._shape.text_frame.paragraphs:
            for run in paragraph.runs:
                run._r.get_or_add_rPr().set("lang", language_tag)

    def copy_style(self) -> StyleTemplate:
        return StyleTemplate(name=self._shape.name, payload=copy.deepcopy(self._shape._element))

    def delete(self) -> None:
        element = self._shape._element
        element.getparent().remove(element)


class PptxLayout(DocumentLayout):
    """Adapter around a python-pptx slide layout."""

    def __init__(self, layout) -> None:
        self._layout = layout

    @property
    def name(self) -> str:
        return self._layout.name

    @property
    def part(self):
        return self._layout.part

    def shapes(self) -> List[DocumentShape]:
        return [PptxShape(shape) for shape in self._layout.shapes]

    def delete(self) -> None:
        # SlideLayouts.remove() refuses layouts that are still in use.
        self._layout.slide_master.slide_layouts.remove(self._layout)


# ----------------------------------------------------------------------
# Slides
# ----------------------------------------------------------------------

def _paste_into(shapes, template: StyleTemplate) -> PptxShape:
    element = copy.deepcopy(template.payload)
    shape_id = shapes._next_shape_id
    for c_nv_pr in element.iter(qn("p:cNvPr")):
        c_nv_pr.set("id", str(shape_id))
        break
    shapes._spTree.insert_element_before(element, "p:extLst")
    return PptxShape(shapes[-1])


class PptxSlide(DocumentSlide):
    """Adapter around a python-pptx slide."""

    def __init__(self, slide, presentation: "PptxPresentation") -> None:
        self._slide = slide
        self._presentation = presentation

    @property
    def slide_id(self) -> int:
        return self._slide.slide_id

    @property
    def position(self) -> int:
        return self._presentation.position_of(self._slide.slide_id)

    def layout(self) -> PptxLayout:
        return PptxLayout(self._slide.slide_layout)

    def set_layout(self, layout: DocumentLayout) -> None:
        if not isinstance(layout, PptxLayout):
            raise TypeError(f"expected a PptxLayout, got {type(layout).__name__}")
        slide_part = self._slide.part
        for r_id, rel in list(slide_part.rels.items()):
            if rel.reltype == RT.SLIDE_LAYOUT:
                slide_part.drop_rel(r_id)
                slide_part.relate_to(layout.part, RT.SLIDE_LAYOUT)
                return
        raise DocumentAccessError(f"slide {self.slide_id} has no slide layout relationship")

    def shapes(self) -> List[DocumentShape]:
        return [PptxShape(shape) for shape in self._slide.shapes]

    def placeholders(self) -> List[DocumentShape]:
        placeholders = [shape for shape in self._slide.shapes if shape.is_placeholder]
        placeholders.sort(key=lambda shape: shape.placeholder_format.idx)
        return [PptxShape(shape) for shape in placeholders]

    def restore_layout_placeholders(
        self, roles: Iterable[PlaceholderRole]
    ) -> List[DocumentShape]:
        wanted = set(roles)
        present = {
            shape.placeholder_format.idx
            for shape in self._slide.shapes
            if shape.is_placeholder
        }
        restored: List[DocumentShape] = []
        for layout_placeholder in self._slide.slide_layout.placeholders:
            if _placeholder_role(layout_placeholder) not in wanted:
                continue
            if layout_placeholder.placeholder_format.idx in present:
                continue
            self._slide.shapes.clone_placeholder(layout_placeholder)
            restored.append(PptxShape(self._slide.shapes[-1]))
        return restored

    @property
    def has_notes_page(self) -> bool:
        return self._slide.has_notes_slide

    def notes_shapes(self) -> List[DocumentShape]:
        if not self._slide.has_notes_slide:
            return []
        return [PptxShape(shape) for shape in self._slide.notes_slide.shapes]

    def paste(self, template: StyleTemplate) -> DocumentShape:
        return _paste_into(self._slide.shapes, template)

    def paste_notes(self, template: StyleTemplate) -> DocumentShape:
        return _paste_into(self._slide.notes_slide.shapes, template)


# ----------------------------------------------------------------------
# Presentation
# ----------------------------------------------------------------------

class PptxPresentation(DocumentPresentation):
    """Adapter around a python-pptx ``Presentation``."""

    def __init__(self, prs, path: Path, *, visible: bool = False) -> None:
        self._prs = prs
        self._path = Path(path)
        self.visible = visible

    @property
    def path(self) -> Path:
        return self._path

    @property
    def pptx(self):
        if self._prs is None:
            raise SessionError(f"presentation {self._path} has been closed")
        return self._prs

    @property
    def _sld_id_lst(self):
        return self.pptx.slides._sldIdLst

    # ------------------------------------------------------------------
    # slides
    # ------------------------------------------------------------------
    def slides(self) -> List[DocumentSlide]:
        return [PptxSlide(slide, self) for slide in self.pptx.slides]

    def slide_at(self, position: int) -> DocumentSlide:
        if not 1 <= position <= len(self._sld_id_lst):
            raise IndexError(f"slide position {position} out of range")
        return PptxSlide(self.pptx.slides[position - 1], self)

    def position_of(self, slide_id: int) -> int:
        for position, sld_id in enumerate(self._sld_id_lst, start=1):
            if sld_id.id == slide_id:
                return position
        raise KeyError(f"slide {slide_id} is not part of {self._path}")

    def delete_slide(self, slide: DocumentSlide) -> None:
        for sld_id in list(self._sld_id_lst):
            if sld_id.id == slide.slide_id:
                # the slide can no longer resolve its own id once unlinked
                slide_id, r_id = sld_id.id, sld_id.rId
                self._sld_id_lst.remove(sld_id)
                self.pptx.part.drop_rel(r_id)
                self._forget_section_slide(slide_id)
                return
        raise KeyError(f"slide {slide.slide_id} is not part of {self._path}")

    def insert_from_file(
        self,
        path: Path,
        index: int,
        first: Optional[int] = None,
        last: Optional[int] = None,
    ) -> int:
        if not 0 <= index <= len(self._sld_id_lst):
            raise IndexError(f"insert index {index} out of range")
        source = _load_presentation(Path(path))
        source_slides = list(source.slides)
        first = first or 1
        last = last or len(source_slides)
        if not 1 <= first <= last <= len(source_slides):
            raise IndexError(
                f"slide range {first}..{last} out of range for {path} "
                f"({len(source_slides)} slides)"
            )

        anchor_id = self._sld_id_lst[index - 1].id if index > 0 else None
        inserted: List[int] = []
        for offset, source_slide in enumerate(source_slides[first - 1:last]):
            new_slide = self._clone_slide(source_slide)
            sld_id = self._sld_id_lst[-1]
            self._sld_id_lst.remove(sld_id)
            self._sld_id_lst.insert(index + offset, sld_id)
            inserted.append(new_slide.slide_id)
        self._attach_to_section(inserted, anchor_id)
        return len(inserted)

    # ------------------------------------------------------------------
    # sections
    # ------------------------------------------------------------------
    def sections(self) -> List[SectionInfo]:
        position_by_id = {
            sld_id.id: position
            for position, sld_id in enumerate(self._sld_id_lst, start=1)
        }
        result: List[SectionInfo] = []
        next_position = 1
        for section in self._section_elements():
            ids = [i for i in _section_slide_ids(section) if i in position_by_id]
            first_slide = position_by_id[ids[0]] if ids else next_position
            result.append(
                SectionInfo(
                    name=section.get("name", ""),
                    first_slide=first_slide,
                    slide_count=len(ids),
                )
            )
            next_position = first_slide + len(ids)
        return result

    def delete_all_sections(self) -> None:
        section_lst = self._section_list()
        if section_lst is None:
            return
        ext = section_lst.getparent()
        ext.getparent().remove(ext)

    def add_section_before(self, slide_index: int, name: str) -> None:
        slide_ids = [sld_id.id for sld_id in self._sld_id_lst]
        if not 1 <= slide_index <= len(slide_ids):
            raise IndexError(f"slide index {slide_index} out of range")
        target_id = slide_ids[slide_index - 1]
        section_lst = self._section_list(create=True)
        sections = section_lst.findall(_p14("section"))

        if not sections:
            if slide_index > 1:
                section_lst.append(
                    _new_section(DEFAULT_SECTION_NAME, slide_ids[:slide_index - 1])
                )
            section_lst.append(_new_section(name, slide_ids[slide_index - 1:]))
            return

        for section in sections:
            ids_lst = section.find(_p14("sldIdLst"))
            if ids_lst is None:
                continue
            entries = ids_lst.findall(_p14("sldId"))
            ids = [int(entry.get("id")) for entry in entries]
            if target_id not in ids:
                continue
            split = ids.index(target_id)
            for entry in entries[split:]:
                ids_lst.remove(entry)
            section.addnext(_new_section(name, ids[split:]))
            return

        section_lst.append(_new_section(name, [target_id]))

    def append_section(self, ordinal: int, name: str) -> None:
        section_lst = self._section_list(create=True)
        sections = section_lst.findall(_p14("section"))
        new_section = _new_section(name, [])
        if 1 <= ordinal <= len(sections):
            sections[ordinal - 1].addprevious(new_section)
        else:
            section_lst.append(new_section)

    def _section_list(self, create: bool = False):
        prs_element = self.pptx._element
        ext_lst = prs_element.find(qn("p:extLst"))
        if ext_lst is not None:
            for ext in ext_lst.findall(qn("p:ext")):
                if ext.get("uri") != SECTION_EXT_URI:
                    continue
                section_lst = ext.find(_p14("sectionLst"))
                if section_lst is not None:
                    return section_lst
        if not create:
            return None
        if ext_lst is None:
            ext_lst = etree.SubElement(prs_element, qn("p:extLst"))
        ext = etree.SubElement(ext_lst, qn("p:ext"))
        ext.set("uri", SECTION_EXT_URI)
        return etree.SubElement(ext, _p14("sectionLst"), nsmap={"p14": P14_NS})

    def _section_elements(self) -> list:
        section_lst = self._section_list()
        return [] if section_lst is None else section_lst.findall(_p14("section"))

    def _forget_section_slide(self, slide_id: int) -> None:
        for section in self._section_elements():
            for entry in section.iter(_p14("sldId")):
                if int(entry.get("id")) == slide_id:
                    entry.getparent().remove(entry)
                    return

    def _attach_to_section(self, slide_ids: List[int], anchor_id: Optional[int]) -> None:
        """Add newly inserted slides to the section of the slide before them."""

        sections = self._section_elements()
        if not sections or not slide_ids:
            return
        target, insert_at = sections[0], 0
        if anchor_id is not None:
            for section in sections:
                ids = _section_slide_ids(section)
                if anchor_id in ids:
                    target, insert_at = section, ids.index(anchor_id) + 1
                    break
        ids_lst = target.find(_p14("sldIdLst"))
        if ids_lst is None:
            ids_lst = etree.SubElement(target, _p14("sldIdLst"))
        for offset, slide_id in enumerate(slide_ids):
            entry = etree.Element(_p14("sldId"), nsmap={"p14": P14_NS})
            entry.set("id", str(slide_id))
            ids_lst.insert(insert_at + offset, entry)

    # ------------------------------------------------------------------
    # layouts, masters, metadata
    # ------------------------------------------------------------------
    def layouts(self) -> List[DocumentLayout]:
        return [
            PptxLayout(layout)
            for master in self.pptx.slide_masters
            for layout in master.slide_layouts
        ]

    def notes_master_shapes(self) -> List[DocumentShape]:
        return [PptxShape(shape) for shape in self.pptx.notes_master.shapes]

    def properties(self) -> DocumentProperties:
        core = self.pptx.core_properties
        return DocumentProperties(
            title=core.title or None,
            subject=core.subject or None,
            category=core.category or None,
            keywords=core.keywords or None,
        )

    def set_properties(self, properties: DocumentProperties) -> None:
        core = self.pptx.core_properties
        for name in DocumentProperties.FIELDS:
            value = getattr(properties, name)
            if value is not None:
                setattr(core, name, value)

    def relocate(self, path: Path) -> None:
        self._path = Path(path)

    def save(self) -> None:
        try:
            self.pptx.save(str(self._path))
        except OSError as exc:
            raise DocumentAccessError(
                f"cannot save {self._path}: {exc}", original_error=exc
            ) from exc

    def close(self) -> None:
        self._prs = None

    # ------------------------------------------------------------------
    # slide cloning
    # ------------------------------------------------------------------
    def _clone_slide(self, source_slide):
        layout = self._matching_layout(source_slide.slide_layout)
        new_slide = self.pptx.slides.add_slide(layout)
        self._ensure_unique_partname(new_slide.part, "/ppt/slides/slide%d.xml")

        for shape in list(new_slide.shapes):
            element = shape._element
            element.getparent().remove(element)

        rel_map: Dict[str, str] = {}
        tree = new_slide.shapes._spTree
        for element in source_slide.shapes._spTree.iter_shape_elms():
            new_element = copy.deepcopy(element)
            self._copy_relationships(new_element, source_slide.part, new_slide.part, rel_map)
            tree.insert_element_before(new_element, "p:extLst")

        background = source_slide._element.cSld.find(qn("p:bg"))
        if background is not None:
            new_background = copy.deepcopy(background)
            self._copy_relationships(new_background, source_slide.part, new_slide.part, rel_map)
            new_slide._element.cSld.insert(0, new_background)

        if source_slide.has_notes_slide:
            source_notes = source_slide.notes_slide.notes_text_frame
            new_notes = new_slide.notes_slide.notes_text_frame
            if source_notes is not None and new_notes is not None and source_notes.text:
                new_notes.text = source_notes.text
        return new_slide

    def _matching_layout(self, source_layout):
        for master in self.pptx.slide_masters:
            for layout in master.slide_layouts:
                if layout.name == source_layout.name:
                    return layout
        return self._import_layout(source_layout)

    def _import_layout(self, source_layout):
        """Copy ``source_layout`` into the first slide master."""

        LOGGER.debug("  Importing slide layout \"%s\"", source_layout.name)
        master = self.pptx.slide_master
        package = self.pptx.part.package
        partname = package.next_partname("/ppt/slideLayouts/slideLayout%d.xml")
        element = copy.deepcopy(source_layout._element)
        layout_part = SlideLayoutPart(
            partname, CT.PML_SLIDE_LAYOUT, package=package, element=element
        )
        self._copy_relationships(element, source_layout.part, layout_part, {})
        layout_part.relate_to(master.part, RT.SLIDE_MASTER)
        r_id = master.part.relate_to(layout_part, RT.SLIDE_LAYOUT)

        entry = OxmlElement("p:sldLayoutId")
        entry.set("id", str(self._next_layout_id()))
        entry.set(qn("r:id"), r_id)
        master._element.get_or_add_sldLayoutIdLst().append(entry)
        return layout_part.slide_layout

    def _next_layout_id(self) -> int:
        ids = [int(value) for value in self.pptx._element.xpath("./p:sldMasterIdLst/p:sldMasterId/@id")]
        for master in self.pptx.slide_masters:
            ids.extend(
                int(value)
                for value in master._element.xpath("./p:sldLayoutIdLst/p:sldLayoutId/@id")
            )
        return max(ids + [_MIN_LAYOUT_ID - 1]) + 1

    def _copy_relationships(self, element, source_part, dest_part, rel_map: Dict[str, str]) -> None:
        """Re-point every relationship reference in ``element`` at ``dest_part``."""

        for node in element.iter(etree.Element):
            for attr, r_id in list(node.attrib.items()):
                if not attr.startswith(_R_ATTR_PREFIX) or not r_id:
                    continue
                if r_id not in rel_map:
                    rel_map[r_id] = self._copy_relationship(source_part, dest_part, r_id)
                node.set(attr, rel_map[r_id])

    def _copy_relationship(self, source_part, dest_part, r_id: str) -> str:
        rel = source_part.rels[r_id]
        if rel.is_external:
            return dest_part.relate_to(rel.target_ref, rel.reltype, is_external=True)
        if rel.reltype == RT.IMAGE:
            _, new_r_id = dest_part.get_or_add_image_part(io.BytesIO(rel.target_part.blob))
            return new_r_id
        if rel.reltype in (RT.SLIDE, RT.SLIDE_LAYOUT, RT.SLIDE_MASTER, RT.NOTES_SLIDE):
            # jumps into the source deck cannot be carried over
            return ""
        return dest_part.relate_to(self._copy_part(rel.target_part), rel.reltype)

    def _copy_part(self, part) -> Part:
        package = self.pptx.part.package
        stem, ext = posixpath.splitext(str(part.partname))
        template = re.sub(r"\d+$", "", stem) + "%d" + ext
        return Part(
            package.next_partname(template), part.content_type, blob=part.blob, package=package
        )

    def _ensure_unique_partname(self, part, template: str) -> None:
        # add_slide() numbers new slides by count, which collides after deletions
        package = self.pptx.part.package
        clashes = sum(1 for item in package.iter_parts() if item.partname == part.partname)
        if clashes > 1:
            part.partname = package.next_partname(template)


def _section_slide_ids(section) -> List[int]:
    ids_lst = section.find(_p14("sldIdLst"))
    if ids_lst is None:
        return []
    return [int(entry.get("id")) for entry in ids_lst.findall(_p14("sldId"))]


def _new_section(name: str, slide_ids: Iterable[int]):
    section = etree.Element(_p14("section"), nsmap={"p14": P14_NS})
    section.set("name", name)
    section.set("id", "{%s}" % str(uuid.uuid4()).upper())
    ids_lst = etree.SubElement(section, _p14("sldIdLst"))
    for slide_id in slide_ids:
        etree.SubElement(ids_lst, _p14("sldId")).set("id", str(slide_id))
    return section


def _load_presentation(path: Path):
    try:
        return Presentation(str(path))
    except (OSError, PackageNotFoundError, zipfile.BadZipFile) as exc:
        raise DocumentAccessError(f"cannot open {path}: {exc}", original_error=exc) from exc


# ----------------------------------------------------------------------
# Session
# ----------------------------------------------------------------------

class PptxEditorSession(EditorSession):
    """Editing session over python-pptx.

    Only one session may be open per process; creating a new one terminates
    a stale session left open by an earlier run.
    """

    _active: Optional["PptxEditorSession"] = None

    def __init__(self) -> None:
        stale = PptxEditorSession._active
        if stale is not None and stale.is_open:
            LOGGER.warning("A previous editor session is still open -> session terminated.")
            stale.close()
        self._presentations: List[PptxPresentation] = []
        self._open = True
        PptxEditorSession._active = self

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def presentations(self) -> List[PptxPresentation]:
        return list(self._presentations)

    def _ensure_open(self) -> None:
        if not self._open:
            raise SessionError("editor session has been closed")

    def open(self, path: Path, visible: bool = False) -> PptxPresentation:
        self._ensure_open()
        presentation = PptxPresentation(_load_presentation(Path(path)), Path(path), visible=visible)
        self._presentations.append(presentation)
        return presentation

    def copy_file(self, source: Path, destination: Path) -> None:
        self._ensure_open()
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise DocumentAccessError(
                f"cannot copy {source} to {destination}: {exc}", original_error=exc
            ) from exc

    def move_file(self, source: Path, destination: Path) -> None:
        self._ensure_open()
        try:
            Path(source).replace(destination)
        except OSError as exc:
            raise DocumentAccessError(
                f"cannot move {source} to {destination}: {exc}", original_error=exc
            ) from exc

    def remove_file(self, path: Path) -> None:
        Path(path).unlink(missing_ok=True)

    def close(self) -> None:
        for presentation in self._presentations:
            presentation.close()
        self._presentations.clear()
        self._open = False
        if PptxEditorSession._active is self:
            PptxEditorSession._active = None
        # drop the proxies of the closed packages
        gc.collect()
