from pathlib import Path
from setuptools import setup, find_packages

__version__ = "1.0.0"

try:
    install_requires = [
        line.strip()
        for line in Path(__file__)
        .with_name("requirements.txt")
        .read_text(encoding="utf8")
        .splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]
except FileNotFoundError:
    install_requires = """
cryptography>=42.0
pyOpenSSL>=24.0
certifi
asn1crypto
pyyaml
pydantic>=2.0""".split()


setup(
    name="servertrust",
    version=__version__,
    description="Decide whether a TLS server certificate chain deserves your trust.",
    classifiers=[
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security :: Cryptography",
        "Topic :: Internet",
    ],
    install_requires=install_requires,
    extras_require={"test": ["pytest"]},
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    long_description="""
# servertrust

Server certificate trust evaluation for TLS client connections.

Given the certificate chain a server presented and the hostname that was dialed,
decide whether the connection is trusted. Each verification is an independent
policy switch:

- `verify_chain` every certificate is issued and signed by the next one in the chain
- `verify_root` the last certificate is exactly one of the trusted roots
- `accept_self_signed` a lone untrusted certificate is accepted, and audited
- `check_domain_match` the certificate identity (xmppAddr or common name) matches the hostname
- `check_expiry` every certificate is inside its validity window

```py
from servertrust import TrustEvaluator, TrustedRootSet

evaluator = TrustEvaluator(roots=TrustedRootSet.load())
result = evaluator.evaluate(conn.get_peer_cert_chain(), "chat.example.com")
print('Trusted' if result.trusted else result.error)
```
    """,
    long_description_content_type="text/markdown",
)
