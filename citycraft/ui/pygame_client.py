"""Pygame 2D view for CityCraft.

Draws the board, building palette, metric bars and advisory line, and
turns mouse/keyboard input into engine commands.  The renderer only
reads GameSnapshots; the recently-placed highlight and the debrief
panel are view state that the engine never sees.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from citycraft.simulation.engine import CommandResult, GameEngine

from citycraft.city.catalogue import CATALOGUE, METRIC_NAMES
from citycraft.simulation.snapshot import EndReason, GameSnapshot, Phase
from citycraft.ui.debrief import DebriefGate
from citycraft.ui.markers import RecentPlacements
from citycraft.ui.preview import hover_hint
from citycraft.world.terrain import TerrainKind

# Colour palette
_BG = (236, 240, 248)
_PANEL = (248, 250, 252)
_TEXT = (30, 41, 59)
_MUTED = (100, 116, 139)
_GOOD = (16, 185, 129)
_BAD = (225, 29, 72)
_BAR_BG = (203, 213, 225)
_SELECTED = (79, 70, 229)
_OVERLAY = (15, 23, 42, 190)

_TERRAIN_COLOURS: dict[TerrainKind, tuple[int, int, int]] = {
    TerrainKind.LAND: (209, 250, 229),
    TerrainKind.WATER: (125, 211, 252),
    TerrainKind.GREENBELT: (134, 239, 172),
}

# Tile colour and short label per building
_SPRITES: dict[str, tuple[tuple[int, int, int], str]] = {
    "hdb": ((251, 146, 60), "HDB"),
    "mrt": ((250, 204, 21), "MRT"),
    "park": ((52, 211, 153), "Park"),
    "hawker": ((251, 113, 133), "Hawker"),
    "school": ((129, 140, 248), "School"),
    "factory": ((161, 161, 170), "Factory"),
    "road": ((168, 162, 158), "Road"),
}

# Highlight flash (white) blended over a new tile as it fades
_FLASH = np.array([255, 255, 255], dtype=np.float64)

_END_TITLES: dict[EndReason, str] = {
    EndReason.TARGETS_MET: "All targets met - you win!",
    EndReason.OUT_OF_TURNS: "Out of turns",
    EndReason.OVERDRAWN: "Over budget",
    EndReason.FINISHED_EARLY: "Finished early",
}

HOW_TO_PLAY: tuple[str, ...] = (
    "1. Select a building from the palette on the right (or keys 1-7).",
    "2. Click the map to place it. Water tiles cannot be built on.",
    "3. Click a placed building to remove it for a 50% refund.",
    "4. Meet all five targets before running out of budget or turns.",
    "Bonus: HDB blocks next to MRT stations get +6 accessibility.",
    "Bonus: Parks reduce noise for adjacent homes, schools and hawker centres.",
)


def cell_at_pixel(x: int, y: int, cell_size: int, grid_size: int) -> int | None:
    """Return the board cell under a pixel, or None if off the board."""
    if x < 0 or y < 0:
        return None
    col, row = x // cell_size, y // cell_size
    if col >= grid_size or row >= grid_size:
        return None
    return row * grid_size + col


def bar_fill(value: int, target: int, *, inverse: bool = False) -> float:
    """Return how full a metric bar should be, from 0.0 to 1.0.

    Normal bars fill towards the target.  Inverse (ceiling) bars stay
    full while under the target and drain as the value overshoots it.
    """
    scale = max(target, 1)
    if inverse:
        if value <= target:
            return 1.0
        return float(np.clip(1.0 - (value - target) / scale, 0.0, 1.0))
    return float(np.clip(value / scale, 0.0, 1.0))


def objective_lines(snapshot: GameSnapshot) -> list[str]:
    """Return the objectives shown on the start screen."""
    t = snapshot.targets
    return [
        "Turn all five meters green to win.",
        f"Access >= {t.access}   Green >= {t.green}   Noise <= {t.noise_max}",
        f"Jobs >= {t.jobs}   Housing >= {t.housing}",
        f"Budget ${snapshot.budget}, {snapshot.turns_left} turns (placements).",
        "Remove a tile for a 50% refund and try a new idea.",
    ]


def _blend(base: tuple[int, int, int], t: float) -> list[int]:
    """Mix ``t`` of the flash colour into ``base``."""
    colour = np.asarray(base, dtype=np.float64)
    return (colour + t * (_FLASH - colour)).astype(int).tolist()


class PygameRenderer:
    """Renders a GameEngine session into a Pygame window.

    Attributes:
        engine: The session being played.
        cell_size: Pixel size of each board cell.
        snapshot: Latest state read from the engine.
        markers: Recently-placed highlights.
        debrief: Password gate for the debrief questions.
    """

    _PANEL_WIDTH: ClassVar[int] = 340
    _ROW_HEIGHT: ClassVar[int] = 22

    def __init__(
        self,
        engine: GameEngine,
        cell_size: int = 80,
        marker_seconds: float = 0.6,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The game session to render.
            cell_size: Pixel width/height per board cell.
            marker_seconds: How long a new building stays highlighted.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.snapshot: GameSnapshot = engine.snapshot()
        self.markers = RecentPlacements(lifetime=marker_seconds)
        self.debrief = DebriefGate()
        self.show_debrief = False
        self.show_help = False
        self.password_input = ""
        self.hover_index: int | None = None

        board = engine.grid.size * cell_size
        self._board_px = board
        self._win_w = board + self._PANEL_WIDTH
        self._win_h = max(board, 640)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("CityCraft")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("sans", 15)
        self.small = pygame.font.SysFont("sans", 12)
        self.title = pygame.font.SysFont("sans", 26, bold=True)
        self.running = True

        self._palette_rects: list[tuple[pygame.Rect, str]] = []
        self._buttons: dict[str, pygame.Rect] = {}
        self._layout()

    def _layout(self) -> None:
        """Compute hit boxes for the palette and buttons."""
        x = self._board_px + 10
        y = 10
        for building in CATALOGUE:
            self._palette_rects.append(
                (pygame.Rect(x, y, self._PANEL_WIDTH - 20, 26), building.id),
            )
            y += 30
        y = self._win_h - 44
        width = (self._PANEL_WIDTH - 40) // 3
        for i, name in enumerate(("primary", "help", "debrief")):
            self._buttons[name] = pygame.Rect(x + i * (width + 10), y, width, 34)

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self._draw()

        pygame.quit()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEMOTION:
                self.hover_index = cell_at_pixel(
                    *event.pos,
                    self.cell_size,
                    self.engine.grid.size,
                )
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(*event.pos)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_click(self, x: int, y: int) -> None:
        if self.show_debrief or self.show_help:
            self.show_debrief = False
            self.show_help = False
            return
        for rect, building_id in self._palette_rects:
            if rect.collidepoint(x, y):
                self._apply(self.engine.select_building(building_id))
                return
        if self._buttons["primary"].collidepoint(x, y):
            self._primary_action()
            return
        if self._buttons["help"].collidepoint(x, y):
            self.show_help = True
            return
        if self._buttons["debrief"].collidepoint(x, y):
            self.show_debrief = True
            return
        index = cell_at_pixel(x, y, self.cell_size, self.engine.grid.size)
        if index is not None:
            self._click_cell(index)

    def _handle_key(self, event: pygame.event.Event) -> None:
        if self.show_debrief and not self.debrief.unlocked:
            if event.key == pygame.K_ESCAPE:
                self.show_debrief = False
            elif event.key == pygame.K_RETURN:
                if not self.debrief.try_unlock(self.password_input):
                    self._flash_message("Incorrect password")
                self.password_input = ""
            elif event.key == pygame.K_BACKSPACE:
                self.password_input = self.password_input[:-1]
            elif event.unicode and event.unicode.isprintable():
                self.password_input += event.unicode
            return

        if event.key == pygame.K_ESCAPE:
            if self.show_debrief or self.show_help:
                self.show_debrief = False
                self.show_help = False
            else:
                self.running = False
        elif event.key == pygame.K_RETURN:
            self._primary_action()
        elif event.key == pygame.K_d:
            self.show_debrief = not self.show_debrief
        elif event.key == pygame.K_h:
            self.show_help = not self.show_help
        elif pygame.K_1 <= event.key <= pygame.K_7:
            building = CATALOGUE[event.key - pygame.K_1]
            self._apply(self.engine.select_building(building.id))

    def _primary_action(self) -> None:
        """Start, finish early, or restart depending on the phase."""
        phase = self.snapshot.phase
        if phase is Phase.MENU:
            self._apply(self.engine.start_game())
        elif phase is Phase.PLAYING:
            self._apply(self.engine.finish_early())
        else:
            self._apply(self.engine.restart())

    def _click_cell(self, index: int) -> None:
        before = self.snapshot.occupants[index]
        result = self._apply(self.engine.place_or_demolish(index))
        if not result.ok:
            return
        after = result.snapshot.occupants[index]
        if before is None and after is not None:
            self.markers.mark(index, time.monotonic())
        elif after is None:
            self.markers.discard(index)

    def _apply(self, result: CommandResult) -> CommandResult:
        """Adopt the snapshot from a command and reset view state on restart."""
        previous = self.snapshot.phase
        self.snapshot = result.snapshot
        if result.ok and previous is not Phase.PLAYING and self.snapshot.phase is Phase.PLAYING:
            self.markers.clear()
            self.show_debrief = False
            self.show_help = False
        return result

    def _flash_message(self, text: str) -> None:
        """Show a view-only message without touching the engine."""
        self.snapshot = replace(self.snapshot, message=text)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_board()
        self._draw_hover()
        self._draw_panel()
        if self.snapshot.phase is not Phase.PLAYING:
            self._draw_phase_overlay()
        if self.show_help:
            self._draw_help()
        if self.show_debrief:
            self._draw_debrief()
        pygame.display.flip()

    def _draw_board(self) -> None:
        """Draw terrain, then buildings on top."""
        cs = self.cell_size
        size = self.engine.grid.size
        now = time.monotonic()
        self.markers.active(now)
        for index, kind in enumerate(self.snapshot.terrain):
            row, col = divmod(index, size)
            rect = pygame.Rect(col * cs, row * cs, cs, cs)
            pygame.draw.rect(self.screen, _TERRAIN_COLOURS[kind], rect)
            pygame.draw.rect(self.screen, _BG, rect, 1)

            occupant = self.snapshot.occupants[index]
            if occupant is None:
                continue
            colour, label = _SPRITES[occupant]
            age = self.markers.age(index, now)
            if age is not None:
                colour = _blend(colour, 1.0 - age / self.markers.lifetime)
            tile = rect.inflate(-8, -8)
            pygame.draw.rect(self.screen, colour, tile, border_radius=10)
            surf = self.small.render(label, True, _TEXT)
            self.screen.blit(surf, surf.get_rect(center=tile.center))

    def _draw_hover(self) -> None:
        """Ghost tile and cost/bonus label under the mouse."""
        if self.hover_index is None:
            return
        hint = hover_hint(self.snapshot, self.hover_index, self.engine.grid)
        if hint is None:
            return
        cs = self.cell_size
        row, col = divmod(self.hover_index, self.engine.grid.size)
        rect = pygame.Rect(col * cs, row * cs, cs, cs)
        if hint.buildable:
            ghost = pygame.Surface((cs - 8, cs - 8), pygame.SRCALPHA)
            ghost.fill((*_SPRITES[hint.building_id][0], 120))
            self.screen.blit(ghost, rect.inflate(-8, -8))
            colour = _TEXT
        else:
            pygame.draw.rect(self.screen, _BAD, rect, 3)
            colour = _BAD
        surf = self.small.render(hint.text, True, colour, _PANEL)
        label = surf.get_rect(midbottom=(rect.centerx, rect.top - 2))
        label.clamp_ip(pygame.Rect(0, 0, self._board_px, self._board_px))
        self.screen.blit(surf, label)

    def _draw_panel(self) -> None:
        """Palette, metrics, status and buttons on the right."""
        x0 = self._board_px
        pygame.draw.rect(
            self.screen,
            _PANEL,
            (x0, 0, self._PANEL_WIDTH, self._win_h),
        )
        snap = self.snapshot

        for rect, building_id in self._palette_rects:
            building = next(b for b in CATALOGUE if b.id == building_id)
            colour, _ = _SPRITES[building_id]
            pygame.draw.rect(self.screen, colour, rect, border_radius=6)
            if building_id == snap.selected:
                pygame.draw.rect(self.screen, _SELECTED, rect, 3, border_radius=6)
            text = f"{building.name}  ${building.cost}"
            self.screen.blit(self.font.render(text, True, _TEXT), (rect.x + 8, rect.y + 4))

        y = self._palette_rects[-1][0].bottom + 14
        for name in METRIC_NAMES:
            y = self._draw_metric(name, x0 + 10, y)

        lines = [
            f"Budget: {snap.budget}",
            f"Turns left: {snap.turns_left}",
            "",
            snap.message,
        ]
        y += 6
        for line in lines:
            self.screen.blit(self.font.render(line, True, _TEXT), (x0 + 10, y))
            y += self._ROW_HEIGHT

        primary = {
            Phase.MENU: "Start",
            Phase.PLAYING: "Finish",
            Phase.ENDED: "Restart",
        }[snap.phase]
        self._draw_button(self._buttons["primary"], primary)
        self._draw_button(self._buttons["help"], "Help")
        self._draw_button(self._buttons["debrief"], "Debrief")

    def _draw_metric(self, name: str, x: int, y: int) -> int:
        """Draw one labelled metric bar and return the next free y."""
        snap = self.snapshot
        value = getattr(snap.metrics, name)
        target = snap.targets.threshold(name)
        inverse = name == "noise"
        good = snap.targets.is_met(name, snap.metrics)
        sign = "<=" if inverse else ">="
        label = f"{name.upper()}  {sign} {target}  ({value})"
        self.screen.blit(
            self.small.render(label, True, _GOOD if good else _BAD),
            (x, y),
        )
        width = self._PANEL_WIDTH - 20
        pygame.draw.rect(self.screen, _BAR_BG, (x, y + 16, width, 8), border_radius=4)
        fill = int(width * bar_fill(value, target, inverse=inverse))
        if fill > 0:
            pygame.draw.rect(
                self.screen,
                _GOOD if good else _BAD,
                (x, y + 16, fill, 8),
                border_radius=4,
            )
        return y + 32

    def _draw_button(self, rect: pygame.Rect, text: str) -> None:
        pygame.draw.rect(self.screen, _TEXT, rect, border_radius=8)
        surf = self.font.render(text, True, _PANEL)
        self.screen.blit(surf, surf.get_rect(center=rect.center))

    def _draw_phase_overlay(self) -> None:
        """Menu and result screens drawn over the board."""
        snap = self.snapshot
        overlay = pygame.Surface((self._board_px, self._board_px), pygame.SRCALPHA)
        overlay.fill(_OVERLAY)
        self.screen.blit(overlay, (0, 0))

        if snap.phase is Phase.MENU:
            title = "CityCraft"
            body = [*objective_lines(snap), "", "Press Enter or click Start."]
        else:
            title = _END_TITLES.get(snap.end_reason, "Game over")
            m = snap.metrics
            body = [
                f"Access {m.access}  Green {m.green}  Noise {m.noise}",
                f"Jobs {m.jobs}  Housing {m.housing}",
                f"Budget {snap.budget}  Turns used {snap.turns_used}",
                "",
                "Press Enter or click Restart.",
            ]

        y = self._board_px // 3
        surf = self.title.render(title, True, _PANEL)
        self.screen.blit(surf, surf.get_rect(center=(self._board_px // 2, y)))
        y += 40
        for line in body:
            surf = self.font.render(line, True, _PANEL)
            self.screen.blit(surf, surf.get_rect(center=(self._board_px // 2, y)))
            y += self._ROW_HEIGHT

    def _draw_help(self) -> None:
        """How-to-play panel over the whole window."""
        overlay = pygame.Surface((self._win_w, self._win_h), pygame.SRCALPHA)
        overlay.fill(_OVERLAY)
        self.screen.blit(overlay, (0, 0))

        x, y = 30, 30
        self.screen.blit(self.title.render("How to play", True, _PANEL), (x, y))
        y += 44
        for line in HOW_TO_PLAY:
            self.screen.blit(self.font.render(line, True, _PANEL), (x, y))
            y += self._ROW_HEIGHT
        y += self._ROW_HEIGHT
        self.screen.blit(
            self.small.render("Click anywhere or press H to close.", True, _MUTED),
            (x, y),
        )

    def _draw_debrief(self) -> None:
        """Password prompt, or the questions once unlocked."""
        overlay = pygame.Surface((self._win_w, self._win_h), pygame.SRCALPHA)
        overlay.fill(_OVERLAY)
        self.screen.blit(overlay, (0, 0))

        x, y = 30, 30
        self.screen.blit(self.title.render("Debrief", True, _PANEL), (x, y))
        y += 44
        if not self.debrief.unlocked:
            prompt = f"Teacher password: {'*' * len(self.password_input)}_"
            self.screen.blit(self.font.render(prompt, True, _PANEL), (x, y))
            y += self._ROW_HEIGHT
            self.screen.blit(
                self.small.render(self.snapshot.message, True, _MUTED),
                (x, y),
            )
            return

        for number, (_, question) in enumerate(self.debrief.questions(), start=1):
            for line in _wrap(f"{number}. {question}", 80):
                self.screen.blit(self.font.render(line, True, _PANEL), (x, y))
                y += self._ROW_HEIGHT
            y += 6


def _wrap(text: str, width: int) -> list[str]:
    """Greedy word wrap to at most ``width`` characters per line."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if len(candidate) > width and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
