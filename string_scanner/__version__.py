"""Version information for string-scanner."""

__version__ = "1.2.0"
__author__ = "String Scanner Contributors"
__description__ = "Extract user-facing string literals from Swift projects"

# Changelog:
# 1.2.0 - Policy text tagging
#        - Long literals containing policy keywords get a "[POLICY_TEXT] " prefix
#        - Keywords, minimum length and marker are configurable
#        - Classifier reports which rule excluded a literal
#        - Per-rule exclusion counts in the scan summary
#
# 1.1.0 - Pluggable logging detection
#        - Logging rules are plain predicates over the literal context
#        - Receiver-based detection (logger.info, os_log, NSLog, print)
#        - Entry point files (AppDelegate.swift) suppress startup messages
#        - --strict flag rejects files with syntax errors
#
# 1.0.0 - Initial release
#        - tree-sitter based extraction of Swift string literals
#        - Interpolation normalized to a placeholder ("Hello \(name)" -> "Hello %@")
#        - Parallel scan with deterministic deduplication
#        - NSLocalizedString detection
#        - JSON report with per-file error list
#        - .string-scanner.yml configuration with validation
