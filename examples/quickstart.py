"""Quickstart example for lexparsec.

This example builds a few small grammars: raw character combinators, a
token-level addition parser, a calculator with operator precedence, and a
tokenizer for a Java-like language.

Note: Examples print failures with FailureFormatter. In production, check
isinstance(result, Failure) (or call result.unwrap()) before using a value.
"""

import logging
import operator

from lexparsec import EMPTY_DEF, JAVA_STYLE, FailureFormatter, TokenParser, parse_all
from lexparsec.lexer import tokenize
from lexparsec.syntax.parser import bind, chainl1, char, choice, forward, many1, one_of, sep_by

logging.basicConfig(level=logging.WARNING)

formatter = FailureFormatter()

# Example 1: Character-level combinators
print("=" * 50)
print("Example 1: Character Combinators")
print("=" * 50)

digits = many1(one_of("0123456789")).map("".join)
csv_row = sep_by(digits, char(","))

print(csv_row.parse("1,22,333").value)
# Output: ['1', '22', '333']

result = parse_all("1,22,x", csv_row)
print(formatter.format(result.reason))
# Output:
# error[EXPECTED_EOF]: Expected end of input, found ','
#   --> line 1, column 5
#   = expected: end of input

# Example 2: Token-level addition
print("\n" + "=" * 50)
print("Example 2: Addition with bind()")
print("=" * 50)

tok = TokenParser(EMPTY_DEF)
addition = bind(
    tok.number(),
    lambda a: tok.symbol("+").then(tok.number()).map(lambda b: a + b),
)

print(addition.parse("10 + 20").value)
# Output: 30

# Example 3: Calculator with precedence
print("\n" + "=" * 50)
print("Example 3: Calculator")
print("=" * 50)


def binary(symbol, func):
    return tok.symbol(symbol).map(lambda _: func)


expr = forward("expr")
atom = choice([tok.number(signed=False), tok.parens(expr)])
term = chainl1(atom, choice([binary("*", operator.mul), binary("/", operator.truediv)]))
expr.define(chainl1(term, choice([binary("+", operator.add), binary("-", operator.sub)])))

for source in ["1 + 2 * 3", "(1 + 2) * 3", "2 * (3 +"]:
    result = parse_all(source, tok.whitespace().then(expr))
    if result:
        print(f"{source} = {result.value}")
    else:
        print(formatter.format(result.reason.furthest()))
# Output: 1 + 2 * 3 = 7
# Output: (1 + 2) * 3 = 9
# Output: error[...] for the unbalanced expression

# Example 4: Tokenizing a Java-like snippet
print("\n" + "=" * 50)
print("Example 4: Tokenizer")
print("=" * 50)

snippet = 'int x = 0x1F; /* hex */ print("x=" + x); // done'
for token in tokenize(JAVA_STYLE).parse(snippet).value:
    print(f"{token.start:3}-{token.end:<3} {token.kind:12} {token.value!r}")
