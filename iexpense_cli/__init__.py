"""Console interface package for iExpense."""
