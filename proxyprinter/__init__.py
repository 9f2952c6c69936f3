"""ProxyPrinter: build a deck of trading cards and print it as proxy sheets."""
