"""Fixed asset catalog and grid layout for theme sprite sheets.

The order of ``ASSET_NAMES`` defines where every icon lands on the sheet.
Appending names is safe; reordering or removing them invalidates every sheet
generated before the change.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

ROW_WIDTH = 20

ASSET_NAMES: Tuple[str, ...] = (
    "Bkg", "Window", "Dots", "RadioOn", "RadioOff", "MainBtnUp", "MainBtnDown",
    "BtnUp", "BtnOver", "BtnDown", "Separator", "TabActive", "TabActiveOver",
    "TabInactive", "TabInactiveOver", "EditBox", "Checkbox", "CheckboxOver",
    "CheckboxDown", "Check",

    "Close", "CloseOver", "DownArrow", "GlowDot", "ArrowRight", "WhiteCircle",
    "DropMenuButton", "ListViewHeader", "ListViewSortArrow", "Outline",
    "Scrollbar", "ScrollbarThumbOver", "ScrollbarThumb", "ScrollbarArrow",
    "ShortButton", "ShortButtonDown", "VertScrollbar", "VertScrollbarThumbOver",
    "VertScrollbarThumb", "VertScrollbarArrow",

    "VertShortButton", "VertShortButtonDown", "Grabber", "DropShadow", "Menu",
    "MenuSepVert", "MenuSepHorz", "MenuSelect", "TreeArrow", "UIPointer",
    "UIImage", "UIComposition", "UILabel", "UIButton", "UIEdit", "UICombobox",
    "UICheckbox", "UIRadioButton", "UIListView", "UITabView",

    "EditCorners", "EditCircle", "EditPathNode", "EditPathNodeSelected",
    "EditAnchor", "UIBone", "UIBoneJoint", "VisibleIcon", "LockIcon",
    "LeftArrow", "KeyframeMakeOff", "RightArrow", "LeftArrowDisabled",
    "KeyframeMakeOn", "RightArrowDisabled", "TimelineSelector",
    "TimelineBracket", "KeyframeOff", "KeyframeOn", "LinkedIcon",

    "CheckboxLarge", "ComboBox", "ComboEnd", "ComboSelectedIcon", "LinePointer",
    "RedDot", "Document", "ReturnPointer", "RefreshArrows", "MoveDownArrow",
    "IconObject", "IconObjectDeleted", "IconObjectAppend", "IconObjectStack",
    "IconValue", "IconPointer", "IconType", "IconError", "IconBookmark",
    "ProjectFolder",

    "Project", "ArrowMoveDown", "Workspace", "MemoryArrowSingle",
    "MemoryArrowDoubleTop", "MemoryArrowDoubleBottom", "MemoryArrowTripleTop",
    "MemoryArrowTripleMiddle", "MemoryArrowTripleBottom", "MemoryArrowRainbow",
    "Namespace", "ResizeGrabber", "AsmArrow", "AsmArrowRev", "AsmArrowShadow",
    "MenuNonFocusSelect", "StepFilter", "WaitSegment", "FindCaseSensitive",
    "FindWholeWord",

    "RedDotUnbound", "MoreInfo", "Interface", "Property", "Field", "Method",
    "Variable", "Constant",
    "Type_ValueType", "Type_Class",
    "LinePointer_Prev", "LinePointer_Opt", "RedDotEx", "RedDotExUnbound",
    "RedDotDisabled", "RedDotExDisabled", "RedDotRunToCursor",
    "GotoButton", "YesJmp", "NoJmp", "WhiteBox", "UpDownArrows", "EventInfo",
    "WaitBar", "HiliteOutline", "HiliteOutlineThin",
    "IconPayloadEnum", "StepFilteredDefault",
    "ThreadBreakpointMatch", "ThreadBreakpointNoMatch",
    "ThreadBreakpointUnbound", "Search", "CheckIndeterminate", "CodeError",
    "CodeWarning", "ComboBoxFrameless", "PanelHeader",

    "ExtMethod",
)


@dataclass(frozen=True)
class GridPosition:
    """Cell coordinates of an asset on the sheet (in cell units)."""

    row: int
    column: int

    def origin(self, cell_size: int) -> Tuple[int, int]:
        """Return the top-left pixel of this cell as (x, y)."""
        return (self.column * cell_size, self.row * cell_size)


def grid_position(index: int, row_width: int = ROW_WIDTH) -> GridPosition:
    """Map a catalog index to its grid cell by packing fixed-width rows."""
    if row_width <= 0:
        raise ValueError(f"Row width must be positive, got {row_width}")
    if index < 0:
        raise ValueError(f"Catalog index must be non-negative, got {index}")
    return GridPosition(row=index // row_width, column=index % row_width)


class AssetCatalog:
    """Ordered, immutable set of logical asset names laid out in rows."""

    def __init__(self, names: Optional[Sequence[str]] = None, row_width: int = ROW_WIDTH):
        names = tuple(ASSET_NAMES if names is None else names)
        if not names:
            raise ValueError("Asset catalog must contain at least one name")
        if row_width <= 0:
            raise ValueError(f"Row width must be positive, got {row_width}")

        seen = set()
        for name in names:
            if name in seen:
                raise ValueError(f"Duplicate asset name in catalog: {name}")
            seen.add(name)

        self.names = names
        self.row_width = row_width
        self._index = {name: i for i, name in enumerate(names)}

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    @property
    def row_count(self) -> int:
        return -(-len(self.names) // self.row_width)

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"Unknown asset name: {name}") from None

    def position(self, name: str) -> GridPosition:
        return grid_position(self.index(name), self.row_width)

    def rows(self) -> List[List[str]]:
        """Partition the catalog into rows of ``row_width`` names."""
        return [
            list(self.names[start:start + self.row_width])
            for start in range(0, len(self.names), self.row_width)
        ]

    def cells(self) -> Iterator[Tuple[int, str, GridPosition]]:
        """Yield (index, name, position) for every asset in layout order."""
        for i, name in enumerate(self.names):
            yield i, name, grid_position(i, self.row_width)
