"""Minimal Tkinter fallback UI: slots and the daily reward."""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from ..core.session import CasinoSession


def launch_tk(session: CasinoSession) -> int:
    root = tk.Tk()
    root.title("Lucky Casino (Fallback)")
    coins = tk.StringVar()
    reels = tk.StringVar(value="? ? ?")
    status = tk.StringVar()
    bet = tk.IntVar(value=session.config.bet_amounts[0])

    def refresh() -> None:
        coins.set(f"Coins: {session.coins:,}")

    def spin() -> None:
        result = session.play_slots(bet.get())
        if not result.accepted:
            status.set(result.reason)
            return
        outcome = result.outcome
        reels.set(" ".join(symbol.glyph for symbol in outcome.details["symbols"]))
        if outcome.details["jackpot"]:
            status.set(f"JACKPOT! +{outcome.payout:,}")
        elif outcome.payout:
            status.set(f"You win {outcome.payout:,}")
        else:
            status.set("Try again!")
        refresh()

    def claim() -> None:
        status.set(session.claim_daily_reward().message)
        refresh()

    ttk.Label(root, textvariable=coins).pack(padx=20, pady=(20, 5))
    ttk.Label(root, textvariable=reels, font=("TkDefaultFont", 28)).pack(padx=20, pady=10)
    ttk.Combobox(root, textvariable=bet, values=session.config.bet_amounts, state="readonly", width=8).pack()
    ttk.Button(root, text="Spin", command=spin).pack(padx=20, pady=5)
    ttk.Button(root, text="Daily Reward", command=claim).pack(padx=20, pady=5)
    ttk.Label(root, textvariable=status).pack(padx=20, pady=10)
    refresh()
    root.mainloop()
    return 0


__all__ = ["launch_tk"]
