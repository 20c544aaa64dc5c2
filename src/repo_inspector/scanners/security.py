"""Security rules: injection sinks, secrets and weak primitives."""

import re

from ..analysis.issues import Severity
from .base import LineScanner, Rule

SECURITY_RULES = (
    Rule(
        rule_id="sql-injection",
        pattern=re.compile(
            r"execute\s*\(\s*[\"'`].*\$\{.*\}.*[\"'`]"
            r"|query\s*\(\s*[\"'`].*\+.*[\"'`]"
        ),
        severity=Severity.HIGH,
        message="Potential SQL Injection",
        category="sql-injection",
        title="Potential SQL Injection",
        description="SQL query constructed using string concatenation or template literals",
        cwe="CWE-89",
        recommendation="Use parameterized queries or prepared statements",
    ),
    Rule(
        rule_id="xss",
        pattern=re.compile(r"innerHTML\s*=|dangerouslySetInnerHTML"),
        severity=Severity.MEDIUM,
        message="Potential XSS Vulnerability",
        category="xss",
        title="Potential XSS Vulnerability",
        description="Direct HTML injection detected",
        cwe="CWE-79",
        recommendation="Sanitize user input before rendering",
    ),
    Rule(
        rule_id="command-injection",
        pattern=re.compile(r"exec\s*\(|spawn\s*\(|system\s*\("),
        severity=Severity.CRITICAL,
        message="Potential Command Injection",
        category="command-injection",
        title="Potential Command Injection",
        description="Execution of system commands detected",
        cwe="CWE-78",
        recommendation="Avoid executing system commands with user input",
    ),
    Rule(
        rule_id="hardcoded-credentials",
        pattern=re.compile(
            r"password\s*=\s*[\"'][^\"']+[\"']"
            r"|api[_-]?key\s*=\s*[\"'][^\"']+[\"']"
        ),
        severity=Severity.CRITICAL,
        message="Hardcoded Credentials",
        category="hardcoded-credentials",
        title="Hardcoded Credentials",
        description="Credentials found in source code",
        cwe="CWE-798",
        recommendation="Use environment variables or secure vaults",
        redact=True,
    ),
    Rule(
        rule_id="weak-random",
        pattern=re.compile(r"Math\.random\(\)"),
        severity=Severity.LOW,
        message="Weak Random Number Generator",
        category="weak-random",
        title="Weak Random Number Generator",
        description="Math.random() is not cryptographically secure",
        cwe="CWE-338",
        recommendation="Use crypto.randomBytes() for security-sensitive operations",
    ),
    Rule(
        rule_id="code-injection",
        pattern=re.compile(r"\beval\s*\("),
        severity=Severity.HIGH,
        message="Use of eval()",
        category="code-injection",
        title="Use of eval()",
        description="eval() can execute arbitrary code",
        cwe="CWE-95",
        recommendation="Avoid using eval(), use safer alternatives",
    ),
    Rule(
        rule_id="insecure-transport",
        pattern=re.compile(r"http://"),
        exclude=re.compile(r"localhost"),
        severity=Severity.MEDIUM,
        message="Insecure HTTP Connection",
        category="insecure-transport",
        title="Insecure HTTP Connection",
        description="HTTP connection detected instead of HTTPS",
        cwe="CWE-319",
        recommendation="Use HTTPS for all external connections",
    ),
)

SECURITY_SCANNER = LineScanner("security", SECURITY_RULES)
