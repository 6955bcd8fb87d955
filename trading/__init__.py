"""Stock trading ledger: portfolios, trade history, snapshot persistence."""
