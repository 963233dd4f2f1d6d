"""Qt widgets for the casino lobby and its games."""
from __future__ import annotations

from typing import List, Optional

from PyQt6 import QtWidgets

from ..core.blackjack import BlackjackRound
from ..core.dice import DiceBet
from ..core.poker import HAND_SIZE, PokerRound
from ..core.roulette import BetKind, RouletteBet
from ..core.session import CasinoSession, PlayResult, SessionEvent
from .widgets import BetSelector, CardLabel


class LobbyWindow(QtWidgets.QMainWindow):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__()
        self.session = session
        self.setWindowTitle("Lucky Casino")
        self.resize(900, 640)
        self.coins_label = QtWidgets.QLabel()
        self.tabs = QtWidgets.QTabWidget()
        self.profile = ProfileView(session)
        self.tabs.addTab(SlotsView(session), "Slots")
        self.tabs.addTab(RouletteView(session), "Roulette")
        self.tabs.addTab(DiceView(session), "Dice")
        self.tabs.addTab(BlackjackView(session), "Blackjack")
        self.tabs.addTab(PokerView(session), "Poker")
        self.tabs.addTab(self.profile, "Profile")
        central = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(central)
        layout.addWidget(self.coins_label)
        layout.addWidget(self.tabs, stretch=1)
        self.setCentralWidget(central)
        self.status = self.statusBar()
        self.status.showMessage("Welcome to Lucky Casino")
        session.subscribe(self.on_event)
        self.update_coins()

    def update_coins(self) -> None:
        self.coins_label.setText(f"Coins: {self.session.coins:,}")

    def on_event(self, event: SessionEvent) -> None:
        self.update_coins()
        if event.kind == "achievement_unlocked":
            self.status.showMessage(f"Achievement unlocked: {event.payload['id']}")
        self.profile.refresh()


class GameView(QtWidgets.QWidget):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__()
        self.session = session
        self.layout_ = QtWidgets.QVBoxLayout(self)
        self.bet = BetSelector(session.config.bet_amounts)
        self.message = QtWidgets.QLabel()

    def show_result(self, result: PlayResult) -> bool:
        if not result.accepted:
            self.message.setText(result.reason)
            return False
        outcome = result.outcome
        if outcome is None:
            self.message.setText("")
        elif outcome.payout:
            self.message.setText(f"Paid {outcome.payout:,} on a {outcome.bet:,} bet")
        else:
            self.message.setText("No win this time")
        return True


class SlotsView(GameView):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__(session)
        reels = QtWidgets.QHBoxLayout()
        self.reels = [CardLabel("?") for _ in range(3)]
        for label in self.reels:
            reels.addWidget(label)
        spin = QtWidgets.QPushButton("Spin")
        spin.clicked.connect(self.on_spin)
        self.layout_.addLayout(reels)
        self.layout_.addWidget(self.bet)
        self.layout_.addWidget(spin)
        self.layout_.addWidget(self.message)
        self.layout_.addStretch()

    def on_spin(self) -> None:
        result = self.session.play_slots(self.bet.amount())
        if self.show_result(result):
            for label, symbol in zip(self.reels, result.outcome.details["symbols"]):
                label.setText(symbol.glyph)


class RouletteView(GameView):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__(session)
        self.kind = QtWidgets.QComboBox()
        for kind in BetKind:
            self.kind.addItem(kind.value, kind)
        self.selection = QtWidgets.QSpinBox()
        self.selection.setRange(0, 36)
        spin = QtWidgets.QPushButton("Spin")
        spin.clicked.connect(self.on_spin)
        self.result_label = CardLabel("-")
        for widget in (self.result_label, self.kind, self.selection, self.bet, spin, self.message):
            self.layout_.addWidget(widget)
        self.layout_.addStretch()

    def on_spin(self) -> None:
        kind: BetKind = self.kind.currentData()
        selection: Optional[int] = None
        if kind in (BetKind.STRAIGHT, BetKind.DOZEN, BetKind.COLUMN):
            selection = self.selection.value()
        try:
            bet = RouletteBet(kind, self.bet.amount(), selection)
        except ValueError as exc:
            self.message.setText(str(exc))
            return
        result = self.session.play_roulette([bet])
        if self.show_result(result):
            details = result.outcome.details
            self.result_label.setText(f"{details['number']} {details['color']}")


class DiceView(GameView):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__(session)
        self.dice_label = CardLabel("- -")
        buttons = QtWidgets.QHBoxLayout()
        for kind in DiceBet:
            button = QtWidgets.QPushButton(kind.value.title())
            button.clicked.connect(lambda _checked=False, k=kind: self.on_roll(k))
            buttons.addWidget(button)
        self.layout_.addWidget(self.dice_label)
        self.layout_.addWidget(self.bet)
        self.layout_.addLayout(buttons)
        self.layout_.addWidget(self.message)
        self.layout_.addStretch()

    def on_roll(self, kind: DiceBet) -> None:
        result = self.session.play_dice(self.bet.amount(), kind)
        if self.show_result(result):
            self.dice_label.setText(" ".join(str(face) for face in result.outcome.details["dice"]))


class BlackjackView(GameView):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__(session)
        self.round: Optional[BlackjackRound] = None
        self.dealer_label = QtWidgets.QLabel("Dealer:")
        self.player_label = QtWidgets.QLabel("Player:")
        controls = QtWidgets.QHBoxLayout()
        self.buttons = {}
        for name, handler in (
            ("Deal", self.on_deal),
            ("Hit", self.on_hit),
            ("Stand", self.on_stand),
            ("Double", self.on_double),
        ):
            button = QtWidgets.QPushButton(name)
            button.clicked.connect(handler)
            controls.addWidget(button)
            self.buttons[name] = button
        for widget in (self.dealer_label, self.player_label, self.bet):
            self.layout_.addWidget(widget)
        self.layout_.addLayout(controls)
        self.layout_.addWidget(self.message)
        self.layout_.addStretch()
        self.update_view()

    def on_deal(self) -> None:
        result = self.session.start_blackjack(self.bet.amount())
        if self.show_result(result):
            self.round = result.round
        self.update_view()

    def on_hit(self) -> None:
        if self.round is not None:
            self.show_result(self.session.blackjack_hit(self.round))
        self.update_view()

    def on_stand(self) -> None:
        if self.round is not None:
            self.show_result(self.session.blackjack_stand(self.round))
        self.update_view()

    def on_double(self) -> None:
        if self.round is not None:
            self.show_result(self.session.double_down(self.round))
        self.update_view()

    def update_view(self) -> None:
        round_ = self.round
        in_play = round_ is not None and not round_.is_settled
        self.buttons["Deal"].setEnabled(not in_play)
        for name in ("Hit", "Stand"):
            self.buttons[name].setEnabled(in_play)
        self.buttons["Double"].setEnabled(in_play and round_.can_double())
        if round_ is None:
            return
        if round_.is_settled:
            dealer = " ".join(str(card) for card in round_.dealer)
            self.dealer_label.setText(f"Dealer: {dealer} ({round_.dealer_value})")
        else:
            self.dealer_label.setText(f"Dealer: {round_.dealer_upcard} ??")
        player = " ".join(str(card) for card in round_.player)
        self.player_label.setText(f"Player: {player} ({round_.player_value})")


class PokerView(GameView):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__(session)
        self.round: Optional[PokerRound] = None
        cards = QtWidgets.QHBoxLayout()
        self.cards: List[CardLabel] = []
        self.holds: List[QtWidgets.QCheckBox] = []
        for _ in range(HAND_SIZE):
            column = QtWidgets.QVBoxLayout()
            label = CardLabel()
            hold = QtWidgets.QCheckBox("Hold")
            column.addWidget(label)
            column.addWidget(hold)
            cards.addLayout(column)
            self.cards.append(label)
            self.holds.append(hold)
        self.deal_button = QtWidgets.QPushButton("Deal")
        self.deal_button.clicked.connect(self.on_deal)
        self.draw_button = QtWidgets.QPushButton("Draw")
        self.draw_button.clicked.connect(self.on_draw)
        self.draw_button.setEnabled(False)
        self.layout_.addLayout(cards)
        for widget in (self.bet, self.deal_button, self.draw_button, self.message):
            self.layout_.addWidget(widget)
        self.layout_.addStretch()

    def on_deal(self) -> None:
        result = self.session.start_poker(self.bet.amount())
        if self.show_result(result):
            self.round = result.round
            for hold in self.holds:
                hold.setChecked(False)
            self.draw_button.setEnabled(True)
            self.deal_button.setEnabled(False)
            self.show_cards()

    def on_draw(self) -> None:
        if self.round is None:
            return
        holds = [idx for idx, hold in enumerate(self.holds) if hold.isChecked()]
        result = self.session.draw_poker(self.round, holds)
        if self.show_result(result):
            self.show_cards()
            name = result.outcome.details["paying_hand"]
            if name:
                self.message.setText(f"{name}: paid {result.outcome.payout:,}")
        self.draw_button.setEnabled(False)
        self.deal_button.setEnabled(True)

    def show_cards(self) -> None:
        for label, card in zip(self.cards, self.round.hand):
            label.setText(str(card))


class ProfileView(QtWidgets.QWidget):
    def __init__(self, session: CasinoSession) -> None:
        super().__init__()
        self.session = session
        layout = QtWidgets.QVBoxLayout(self)
        self.stats = QtWidgets.QLabel()
        self.daily_button = QtWidgets.QPushButton("Claim Daily Reward")
        self.daily_button.clicked.connect(self.on_daily)
        self.name_edit = QtWidgets.QLineEdit()
        self.name_edit.setPlaceholderText("Your name")
        submit = QtWidgets.QPushButton("Add to Leaderboard")
        submit.clicked.connect(self.on_submit)
        self.sound = QtWidgets.QCheckBox("Sound")
        self.sound.toggled.connect(lambda on: self.session.update_settings(sound_enabled=on))
        self.leaderboard = QtWidgets.QListWidget()
        self.achievements = QtWidgets.QListWidget()
        reset = QtWidgets.QPushButton("Reset Progress")
        reset.clicked.connect(self.on_reset)
        self.message = QtWidgets.QLabel()
        for widget in (
            self.stats,
            self.daily_button,
            self.name_edit,
            submit,
            self.sound,
            QtWidgets.QLabel("Leaderboard"),
            self.leaderboard,
            QtWidgets.QLabel("Achievements"),
            self.achievements,
            reset,
            self.message,
        ):
            layout.addWidget(widget)
        self.refresh()

    def refresh(self) -> None:
        state = self.session.snapshot()
        self.stats.setText(
            f"Played {state.games_played} · Won {state.games_won} · "
            f"Streak {state.win_streak} (best {state.highest_win_streak}) · "
            f"Winnings {state.total_winnings:,}"
        )
        self.daily_button.setEnabled(self.session.can_claim_daily)
        self.sound.blockSignals(True)
        self.sound.setChecked(state.settings.sound_enabled)
        self.sound.blockSignals(False)
        self.leaderboard.clear()
        for rank, entry in enumerate(state.leaderboard, start=1):
            self.leaderboard.addItem(f"{rank}. {entry.name} - {entry.coins:,} ({entry.date:%Y-%m-%d})")
        self.achievements.clear()
        for achievement in state.achievements:
            mark = "✔" if achievement.unlocked else "✖"
            self.achievements.addItem(f"{mark} {achievement.title}: {achievement.description}")

    def on_daily(self) -> None:
        self.message.setText(self.session.claim_daily_reward().message)
        self.refresh()

    def on_submit(self) -> None:
        if self.session.add_to_leaderboard(self.name_edit.text()) is None:
            self.message.setText("Enter a name first")
        self.refresh()

    def on_reset(self) -> None:
        answer = QtWidgets.QMessageBox.question(self, "Reset Progress", f"Start over with {self.session.config.starting_coins:,} coins?")
        if answer == QtWidgets.QMessageBox.StandardButton.Yes:
            self.session.reset_casino_data()
        self.refresh()


__all__ = ["LobbyWindow"]
