"""Console and plotting helpers shared by the CLI and reports."""
