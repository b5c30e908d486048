"""SwipeScreen: the front of the active queue as a stack of cards."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QImage
from PySide6.QtWidgets import (
    QLabel,
    QPushButton,
    QStackedLayout,
    QStyle,
    QVBoxLayout,
    QWidget,
)

from app.views.constants import CARD_MARGIN_PX, DEFAULT_CARD_SIZE
from app.views.image_tasks import ImageTaskRunner
from app.views.widgets.swipe_card import SwipeCard
from core.models import PhotoItem
from core.services.gesture_service import DEFAULT_SWIPE_THRESHOLD


class EmptyPhotosView(QWidget):
    """Shown when every photo has been reviewed."""

    goToTrash = Signal()
    rescan = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.addStretch(1)

        icon = QLabel()
        icon.setPixmap(self.style().standardIcon(QStyle.SP_TrashIcon).pixmap(120, 120))
        icon.setAlignment(Qt.AlignCenter)
        root.addWidget(icon)

        title = QLabel("All photos reviewed!")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        root.addWidget(title)

        self._count_label = QLabel()
        self._count_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self._count_label)

        self.btn_trash = QPushButton("Go to trash")
        self.btn_trash.clicked.connect(self.goToTrash)
        root.addWidget(self.btn_trash, 0, Qt.AlignHCenter)

        self.btn_rescan = QPushButton("Rescan")
        self.btn_rescan.setFlat(True)
        self.btn_rescan.clicked.connect(self.rescan)
        root.addWidget(self.btn_rescan, 0, Qt.AlignHCenter)
        root.addStretch(1)

    def set_trash_count(self, count: int) -> None:
        self._count_label.setText(f"{count} photo(s) in the trash waiting to be deleted")


class _CardDeck(QWidget):
    """Holds up to two cards at the same geometry, front-most on top."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.cards: list[SwipeCard] = []

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        for card in self.cards:
            card.setGeometry(self.rect())


class SwipeScreen(QWidget):
    """Main triage screen."""

    trashRequested = Signal(object)
    keepRequested = Signal(object)
    previewRequested = Signal(object)
    goToTrash = Signal()
    rescanRequested = Signal()

    def __init__(
        self,
        runner: ImageTaskRunner,
        card_size: int = DEFAULT_CARD_SIZE,
        threshold: float = DEFAULT_SWIPE_THRESHOLD,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._runner = runner
        self._card_size = int(card_size or DEFAULT_CARD_SIZE)
        self._threshold = threshold
        self._pending: dict[str, SwipeCard] = {}

        root = QVBoxLayout(self)
        root.setContentsMargins(CARD_MARGIN_PX, CARD_MARGIN_PX, CARD_MARGIN_PX, CARD_MARGIN_PX)
        self._stack = QStackedLayout()
        root.addLayout(self._stack)

        self._deck = _CardDeck()
        self._empty = EmptyPhotosView()
        self._empty.goToTrash.connect(self.goToTrash)
        self._empty.rescan.connect(self.rescanRequested)
        self._stack.addWidget(self._deck)
        self._stack.addWidget(self._empty)

    def show_photos(self, front: tuple[PhotoItem, ...], trash_count: int) -> None:
        """Render `front` (first item on top) or the empty view."""
        self._empty.set_trash_count(trash_count)
        if not front:
            self._clear_cards()
            self._stack.setCurrentWidget(self._empty)
            return
        self._stack.setCurrentWidget(self._deck)

        existing = {card.photo.id: card for card in self._deck.cards}
        wanted = [p.id for p in front]
        for pid, card in existing.items():
            if pid not in wanted:
                self._drop_card(card)

        cards: list[SwipeCard] = []
        for photo in front:
            card = existing.get(photo.id) or self._make_card(photo)
            cards.append(card)
        self._deck.cards = cards

        # Raise back to front so the first card ends up on top
        for index, card in reversed(list(enumerate(cards))):
            card.setGeometry(self._deck.rect())
            card.set_interactive(index == 0)
            card.show()
            card.raise_()
        cards[0].setFocus()

    def on_image_loaded(self, token: str, image: QImage | None) -> bool:
        card = self._pending.pop(token, None)
        if card is None:
            return False
        card.set_image(image)
        return True

    def _make_card(self, photo: PhotoItem) -> SwipeCard:
        card = SwipeCard(photo, threshold=self._threshold, parent=self._deck)
        card.swipedLeft.connect(self.trashRequested)
        card.swipedRight.connect(self.keepRequested)
        card.clicked.connect(self.previewRequested)
        token = self._runner.request_card(photo.location, self._card_size)
        self._pending[token] = card
        return card

    def _drop_card(self, card: SwipeCard) -> None:
        for token in [t for t, c in self._pending.items() if c is card]:
            del self._pending[token]
        card.hide()
        card.deleteLater()

    def _clear_cards(self) -> None:
        for card in self._deck.cards:
            self._drop_card(card)
        self._deck.cards = []
