"""
Built-in Grammars

Sample grammars for common text formats, written in the bnfuzzer
grammar format.
"""

from typing import Dict, List, Tuple


class BuiltinGrammars:
    """Collection of built-in grammar specifications."""

    @staticmethod
    def get_json_grammar() -> str:
        """Get JSON grammar (simplified)."""
        return r"""
; JSON documents, ABNF style
json = value
value = object / array / string / number / "true" / "false" / "null"
object = "{" [ members ] "}"
members = pair *3( "," pair )
pair = string ":" value
array = "[" [ elements ] "]"
elements = value *3( "," value )
string = %x22 *8 char %x22
char = "a" ... "z" / "A" ... "Z" / "0" ... "9" / " " / "_"
number = [ "-" ] int [ "." 1*3 digit ]
int = "0" / nonzero *5 digit
digit = %x30-39
nonzero = %x31-39
"""

    @staticmethod
    def get_arithmetic_grammar() -> str:
        """Get arithmetic expression grammar."""
        return r"""
; Each factor has a 1 in 4 chance to open a nested expression
expr = term [ ( "+" / "-" ) term ]
term = factor [ ( "*" / "/" ) factor ]
factor = number / number / number / "(" expr ")"
number = "0" / nonzero *3 digit
digit = "0" ... "9"
nonzero = "1" ... "9"
"""

    @staticmethod
    def get_ipv4_grammar() -> str:
        """Get IPv4 dotted-quad address grammar."""
        return r"""
ipv4 = octet "." octet "." octet "." octet
octet = digit                ; 0-9
octet =/ nonzero digit       ; 10-99
octet =/ "1" 2digit          ; 100-199
octet =/ "2" %x30-34 digit   ; 200-249
octet =/ "25" %x30-35        ; 250-255
digit = %x30-39
nonzero = %x31-39
"""

    @staticmethod
    def get_url_grammar() -> str:
        """Get URL grammar."""
        return r"""
url = scheme "://" host [ ":" port ] [ path ] [ query ]
scheme = "http" / "https"
scheme =/ "ftp"
host = label *2( "." label )
label = alpha *7 alnum
port = nonzero 0*3 digit
path = 1*3( "/" 1*6 alnum )
query = "?" param *2( "&" param )
param = label "=" 1*5 alnum
alnum = alpha / digit
alpha = "a" ... "z"
digit = %x30-39
nonzero = %x31-39
"""

    @staticmethod
    def get_http_request_line_grammar() -> str:
        """Get HTTP/1.x request line grammar."""
        return r"""
// BNF style, angle-bracketed symbols
<request-line> ::= <method> " " <request-target> " HTTP/1." ("0" | "1") "\r\n"
<method> ::= "GET" | "HEAD" | "POST" | "PUT" | "DELETE" | "OPTIONS"
<request-target> ::= "/" | 1*4("/" <segment>)
<segment> ::= 1*8<pchar>
<pchar> ::= "a" ... "z" | "0" ... "9" | "-" | "_" | "."
"""

    GRAMMARS: Dict[str, Tuple[str, str]] = {
        'json': ('get_json_grammar', 'json'),
        'arithmetic': ('get_arithmetic_grammar', 'expr'),
        'ipv4': ('get_ipv4_grammar', 'ipv4'),
        'url': ('get_url_grammar', 'url'),
        'http': ('get_http_request_line_grammar', 'request-line'),
    }

    @classmethod
    def get_grammar(cls, name: str) -> str:
        """
        Get grammar by name.

        Args:
            name: Grammar name (json, arithmetic, ipv4, url, http)

        Returns:
            Grammar text
        """
        key = name.lower()
        if key not in cls.GRAMMARS:
            raise ValueError(f"Unknown grammar: {name}. Available: {cls.list_grammars()}")

        getter, _ = cls.GRAMMARS[key]
        return getattr(cls, getter)()

    @classmethod
    def get_entry(cls, name: str) -> str:
        """Get the symbol generation should start from for a grammar."""
        key = name.lower()
        if key not in cls.GRAMMARS:
            raise ValueError(f"Unknown grammar: {name}. Available: {cls.list_grammars()}")
        return cls.GRAMMARS[key][1]

    @classmethod
    def list_grammars(cls) -> List[str]:
        """List available built-in grammars."""
        return list(cls.GRAMMARS)
