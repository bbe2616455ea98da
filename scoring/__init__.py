# scoring -- scheme applicability rules
#
# Modules:
#   evaluator    -- rule-based scheme suggestion scorer (pure, no I/O)
