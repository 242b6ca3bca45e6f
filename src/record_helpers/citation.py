"""Citation formatting for catalogue records (APA, MLA and Chicago styles).

Usage::

    citation = Citation(DateConverter())
    html = citation(driver).get_citation("APA")

Names are expected in "Last, First" form; the helpers below repair the common
deviations (first-name-first, trailing life dates, parenthetical roles, stray
punctuation) before the style rules are applied.
"""
import logging
import re
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from markupsafe import Markup

from .dates import DateConverter
from .utils.error_handling import DateError

logger = logging.getLogger(__name__)

# Words never capitalised in title case. "down", "near", "out", "past" and "up"
# are ambiguous; prepositions of five or more letters are left capitalised.
UNCAPPED_WORDS = {
    'a', 'an', 'and', 'as', 'at', 'but', 'by', 'for', 'from', 'in',
    'into', 'like', 'nor', 'of', 'off', 'on', 'onto', 'or', 'over', 'so',
    'than', 'the', 'to', 'upon', 'via', 'with', 'yet',
}

UNCAPPED_PHRASES = ['even if', 'if only', 'now that', 'on top of']

NAME_SUFFIXES = ('Jr', 'Sr')

DOI_PREFIX = 'https://doi.org/'


# =============================================================================
# NAME AND STRING HELPERS
# =============================================================================

def _ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def strip_punctuation(text: str) -> str:
    """Strip one trailing punctuation mark (. , : ; /) and surrounding space."""
    text = (text or '').strip()
    if text[-1:] in ('.', ',', ':', ';', '/'):
        text = text[:-1]
    return text.strip()


def is_punctuated(text: str) -> bool:
    """Does the string end in punctuation that we want to retain?"""
    return (text or '')[-1:] in ('.', '?', '!')


def is_name_suffix(text: str) -> bool:
    """Jr, Sr or a roman numeral."""
    text = strip_punctuation(text)
    if text in NAME_SUFFIXES:
        return True
    return re.fullmatch(r'[MDCLXVI]+', text) is not None


def is_date_range(text: str) -> bool:
    """'1900-1950', '1970-' or '1970-.'"""
    return re.fullmatch(r'([0-9]+)-([0-9]*)\.?', text.strip()) is not None


def fix_abbreviated_name_letters(text: str) -> str:
    """Add the missing period to a bare initial ('S' or 'John Q')."""
    if len(text) == 1 or re.search(r'\s[a-zA-Z]', text[-2:]):
        return text + '.'
    return text


def clean_name_dates(name: str) -> str:
    """Strip life dates from a "Last, First[, Suffix][, dates]" name."""
    parts = name.split(', ')
    cleaned = parts[0]
    if len(parts) > 1 and not is_date_range(parts[1]):
        cleaned += ', ' + fix_abbreviated_name_letters(parts[1])
        if len(parts) > 2 and is_name_suffix(parts[2]):
            cleaned += ', ' + parts[2]
    # Dates can also lurk at the end of the name itself
    return re.sub(r'\s+(\d{4}-\d{4}|b\. \d{4}|\d{4}-)[,.]*$', '', cleaned)


def reverse_name(name: str) -> str:
    """Turn a "Last, First" name into a "First Last" name."""
    parts = name.split(', ')
    if len(parts) < 2 or is_date_range(parts[1]):
        return parts[0]
    reversed_name = fix_abbreviated_name_letters(parts[1]) + ' ' + parts[0]
    if len(parts) > 2 and is_name_suffix(parts[2]):
        reversed_name += ', ' + parts[2]
    return reversed_name


def abbreviate_name(name: str) -> str:
    """'Burch, Philip H., Jr.' -> 'Burch, P. H., Jr.'"""
    parts = clean_name_dates(name).split(', ')
    abbreviated = parts[0]
    if len(parts) > 1:
        initials = [given[:1] + '.' for given in parts[1].split(' ')]
        abbreviated += ', ' + ' '.join(initials)
        if len(parts) > 2 and is_name_suffix(parts[2]):
            abbreviated = abbreviated.strip() + ', ' + parts[2]
    return abbreviated.strip()


def capitalize_title(title: str) -> str:
    """Title-case a title, leaving short function words and phrases lower case."""
    words = []
    follows_colon = False
    for word in title.split(' '):
        # Exceptional words are still capitalised after a colon
        base_word = re.sub(r'\W', '', word)
        if base_word not in UNCAPPED_WORDS or follows_colon:
            first_char = word[:1]
            if first_char in ('"', "'"):
                word = first_char + _ucfirst(word[1:])
            else:
                word = _ucfirst(word)
        words.append(word)
        follows_colon = word.endswith(':')

    adjusted = _ucfirst(' '.join(words))
    for phrase in UNCAPPED_PHRASES:
        # At the start of the title the phrase keeps an initial capital
        adjusted = re.sub(
            r'^' + phrase + r'\b', _ucfirst(phrase), adjusted, flags=re.IGNORECASE
        )
        adjusted = re.sub(
            r'(.+)\b' + phrase + r'\b',
            lambda m, p=phrase: m.group(1) + p,
            adjusted,
            flags=re.IGNORECASE,
        )
    return adjusted


def _reverse_first_last(name: str) -> str:
    """Non-MARC data may hold "First Last"; reverse names without a comma."""
    name = clean_name_dates(name)
    if ',' not in name:
        parts = name.split(' ')
        if len(parts) > 1:
            last = parts.pop()
            return last.rstrip('.') + ', ' + ' '.join(parts)
    return name


def _tidy_name(name: str) -> str:
    """Drop parenthetical notes, a two-word name's trailing period, stray commas."""
    stripped = re.sub(r'\s\(.*\)', '', name).strip()
    parts = (stripped or name).split(' ')
    # Only two parts: trimming is unlikely to eat a "Jr." or "Sr."
    if len(parts) == 2:
        parts[1] = parts[1].rstrip('.')
    return ' '.join(parts).rstrip(',')


def _trim_corporate_name(name: str) -> str:
    """Corporate names lose a trailing period unless the last word is short ("Co.")."""
    if re.search(r'\s+.{1,3}\.$', name):
        return name
    return name.rstrip('.')


def _first(values: Iterable[str]) -> Optional[str]:
    for value in values or []:
        return value
    return None


def _present(value) -> bool:
    return value is not None and str(value) != ''


def _render(pieces: List) -> str:
    """Join escaped pieces and collapse whitespace runs to single spaces."""
    html = Markup('').join(pieces)
    return ' '.join(str(html).split())


# =============================================================================
# CITATION HELPER
# =============================================================================

class Citation:
    """Builds APA, MLA and Chicago citations for one record at a time."""

    def __init__(self, date_converter: Optional[DateConverter] = None,
                 translator: Optional[Callable[[str], str]] = None):
        self.date_converter = date_converter or DateConverter()
        self.translate = translator or (lambda text: text)
        self.driver = None
        self.details: Dict = {}

    def __call__(self, driver) -> "Citation":
        """Store a record and collect its citation details; returns self."""
        # The driver is needed by _prepare_authors
        self.driver = driver

        authors = self._prepare_authors(driver.try_method('primary_authors') or [])
        corporate_authors: List[str] = []
        if not authors:
            corporate_authors = authors = self._prepare_authors(
                [_trim_corporate_name(a) for a in driver.try_method('corporate_authors') or []],
                is_corporate=True,
            )
        secondary = self._prepare_authors(driver.try_method('secondary_authors') or [])
        if secondary:
            authors = list(dict.fromkeys(authors + secondary))

        # Best available title details
        title = driver.try_method('short_title')
        subtitle = driver.try_method('subtitle')
        if not title:
            title = driver.try_method('title')
        if not title:
            title = driver.try_method('breadcrumb')
        title = title or ''
        if not subtitle and ':' in title:
            title, subtitle = title.split(':', 1)

        edition = driver.try_method('edition')
        self.details = {
            'authors': authors,
            'corporate_authors': corporate_authors,
            'title': title.strip(),
            'subtitle': (subtitle or '').strip(),
            'pub_place': _first(driver.try_method('places_of_publication')),
            'pub_name': _first(driver.try_method('publishers')),
            'pub_date': _first(driver.try_method('publication_dates')),
            'edition': [edition] if edition else [],
            'journal': driver.try_method('container_title'),
        }
        return self

    def _prepare_authors(self, authors: List[str], is_corporate: bool = False) -> List[str]:
        """Bring author names into "Last, First" form."""
        callables = []
        if not is_corporate:
            # MARC names without a comma are meant that way
            if not getattr(self.driver, 'is_marc', False):
                callables.append(_reverse_first_last)
            callables.append(_tidy_name)

        prepared = []
        for value in authors:
            for current in callables:
                value = current(value)
            prepared.append(value)
        return prepared

    # --- Public API ---

    def get_citation(self, citation_format: str) -> str:
        """Return the citation in the requested format, or '' for unknown formats."""
        method = {
            'apa': self.get_citation_apa,
            'mla': self.get_citation_mla,
            'chicago': self.get_citation_chicago,
        }.get((citation_format or '').lower())
        if method is None or self.driver is None:
            logger.debug(f"No citation available for format '{citation_format}'")
            return ''
        return method()

    def get_citations(self, formats: Optional[List[str]] = None) -> Dict[str, str]:
        """Citations for several formats (default: those the record supports)."""
        if formats is None:
            formats = self.driver.try_method('citation_formats') or []
        return {fmt: self.get_citation(fmt) for fmt in formats}

    def get_citation_apa(self) -> str:
        """APA (7th edition) citation."""
        title = self._get_apa_title()
        authors = self._get_apa_authors()
        edition = self._get_edition()
        # Period after the title unless it has punctuation or an edition follows
        period_after_title = not is_punctuated(title) and not edition
        doi = self.driver.try_method('clean_doi')

        pieces = []
        if authors:
            pieces += [authors, ' ']

        if not self.details['journal']:
            year = self._get_year()
            publisher = self._get_publisher(include_pub_place=False)
            if year:
                pieces += ['(', year, '). ']
            pieces += [Markup('<i>'), title, Markup('</i>')]
            if period_after_title:
                pieces.append('.')
            if edition:
                pieces += [' (', edition, ').']
            if publisher:
                pieces += [' ', publisher, '.']
            if doi:
                pieces += [' ', DOI_PREFIX, doi]
            return _render(pieces)

        volume, issue, date = self._get_apa_numbers_and_date()
        page_range = self._get_page_range()
        if date:
            pieces += ['(', date, '). ']
        pieces.append(title)
        if period_after_title:
            pieces.append('.')
        if edition:
            pieces += [' (', edition, ').']
        pieces += [' ', Markup('<i>'), self.details['journal']]
        if _present(volume):
            pieces += [', ', str(volume)]
        pieces.append(Markup('</i>'))
        if _present(issue):
            pieces += ['(', str(issue), ')']
        if page_range:
            pieces += [', ', page_range]
        pieces.append('.')
        if doi:
            pieces += [' ', DOI_PREFIX, doi]
        return _render(pieces)

    def get_citation_chicago(self) -> str:
        """Chicago citation: the MLA logic with Chicago punctuation."""
        return self.get_citation_mla(
            et_al_threshold=9,
            vol_num_separator=', no. ',
            num_prefix=' ',
            vol_prefix='',
            year_format=' (%s)',
            page_number_separator=':',
            include_pub_place=True,
            doi_prefix=DOI_PREFIX,
            label_page_range=False,
            doi_article_comma=False,
        )

    def get_citation_mla(
        self,
        et_al_threshold: int = 2,
        vol_num_separator: str = ', no. ',
        num_prefix: str = ', ',
        vol_prefix: str = 'vol. ',
        year_format: str = ', %s',
        page_number_separator: str = ',',
        include_pub_place: bool = False,
        doi_prefix: Optional[str] = DOI_PREFIX,
        label_page_range: bool = True,
        doi_article_comma: bool = True,
    ) -> str:
        """
        MLA (9th edition) citation.

        Args:
            et_al_threshold: Author count above which only the first is listed
            vol_num_separator: Separator between volume and issue number
            num_prefix: Text in front of the volume/issue/date block
            vol_prefix: Text in front of the volume
            year_format: %-format for the year in the volume/issue/date block
            page_number_separator: Separator between date and page numbers
            include_pub_place: Include the place of publication
            doi_prefix: Prefix in front of the DOI; None omits DOIs
            label_page_range: Put p./pp. in front of page ranges
            doi_article_comma: Join an article DOI with a comma instead of a period
        """
        title = capitalize_title(self._get_apa_title())
        authors = self._get_mla_authors(et_al_threshold)
        period_after_title = not is_punctuated(title)
        doi = self.driver.try_method('clean_doi') if doi_prefix else None

        pieces = []
        if authors:
            pieces += [authors, '. ']

        if not self.details['journal']:
            edition = self._get_edition()
            publisher = self._get_publisher(include_pub_place)
            year = self._get_year()
            pieces += [Markup('<i>'), title, Markup('</i>')]
            if period_after_title:
                pieces.append('.')
            if edition:
                pieces += [' ', edition]
            if publisher:
                pieces += [' ', publisher]
                pieces += [', ', year, '.'] if year else ['.']
            elif year:
                pieces += [' ', year, '.']
            if doi:
                pieces += [' ', doi_prefix, doi, '.']
            return _render(pieces)

        page_range = self._get_page_range()
        journal = capitalize_title(self.details['journal'])
        number_and_date = num_prefix + self._get_mla_number_and_date(
            vol_num_separator, vol_prefix, year_format
        )
        pieces += [Markup('&quot;'), title]
        if period_after_title:
            pieces.append('.')
        pieces += [Markup('&quot; <i>'), journal, Markup('</i>'), number_and_date]
        if page_range:
            pieces += [page_number_separator, ' ']
            if label_page_range:
                pieces.append('pp. ' if '-' in page_range else 'p. ')
            pieces.append(page_range)
        if doi:
            pieces += [', ' if doi_article_comma else '. ', doi_prefix, doi, '.']
        else:
            pieces.append('.')
        return _render(pieces)

    # --- Shared pieces ---

    def _get_page_range(self) -> str:
        start = self.driver.try_method('container_start_page')
        end = self.driver.try_method('container_end_page')
        start = str(start) if _present(start) else ''
        if not _present(end) or start == str(end):
            return start
        return f"{start}-{end}"

    def _split_date(self, month_format: str) -> Tuple[str, str, str]:
        """Year, month and day of the publication date; longer dates are parsed."""
        date = self.details['pub_date'] or ''
        if len(date) > 4:
            try:
                year = self.date_converter.convert_from_display_date('Y', date)
                month = self.date_converter.convert_from_display_date(month_format, date)
                day = self.date_converter.convert_from_display_date('j', date)
                return year, month, day
            except DateError:
                # The raw date is better than nothing
                logger.debug(f"Using unparseable date '{date}' as year")
        return date, '', ''

    def _get_mla_number_and_date(self, vol_num_separator: str = '.',
                                 vol_prefix: str = '', year_format: str = ', %s') -> str:
        """Volume/issue/date portion of an MLA or Chicago citation."""
        vol = self.driver.try_method('container_volume')
        num = self.driver.try_method('container_issue')
        year, month, day = self._split_date('M')
        if month:
            month += '.'

        if _present(vol) or _present(num):
            if _present(vol) and _present(num):
                vol_num = f"{vol}{vol_num_separator}{num}"
            else:
                vol_num = str(vol) if _present(vol) else str(num)
            return (vol_prefix if _present(vol) else '') + vol_num + (year_format % year)

        # No vol/num: a day of 1 is taken to mean a monthly publication
        return (
            (f"{day} " if day and int(day) > 1 else '')
            + (f"{month} " if month else '')
            + year
        )

    def _get_apa_numbers_and_date(self) -> Tuple[str, str, str]:
        """Volume, issue and date for an APA article citation."""
        vol = self.driver.try_method('container_volume')
        num = self.driver.try_method('container_issue')
        year, month, day = self._split_date('F')

        if _present(vol) or _present(num):
            # Only an issue: show it in the volume position
            if not _present(vol):
                return str(num), '', year
            return str(vol), str(num) if _present(num) else '', year

        final_date = (
            year
            + (f", {month}" if month else '')
            + (f" {day}" if day and int(day) > 1 else '')
        )
        return '', '', final_date

    def _get_apa_title(self) -> str:
        title = strip_punctuation(self.details['title'])
        subtitle = strip_punctuation(self.details['subtitle'])
        if subtitle:
            title += ': ' + _ucfirst(subtitle)
        return title

    def _get_apa_authors(self) -> Optional[str]:
        """APA author list; eight or more authors elide all but six and the last."""
        authors = self.details['authors']
        corporate = self.details['corporate_authors']
        author_count = len(authors)
        author_str = ''
        ellipsis = False
        for i, author in enumerate(authors):
            # Corporate authors are never abbreviated
            if author not in corporate:
                author = abbreviate_name(author)
            if i + 1 == author_count and i > 0:
                author_str += ' ' if ellipsis else '& '
                author_str += strip_punctuation(author) + '.'
            elif i > 5:
                if not ellipsis:
                    author_str += '. . .'
                    ellipsis = True
            elif author_count > 1:
                # No comma before "&" in a two-item list without commas ("IBM & Two, P.")
                skip_comma = i + 2 == author_count and ',' not in author_str + author
                author_str += author + (' ' if skip_comma else ', ')
            else:
                author_str += strip_punctuation(author) + '.'
        return author_str or None

    def _get_edition(self) -> Optional[str]:
        """First edition statement that isn't '1st ed.'"""
        for edition in self.details['edition']:
            edition = strip_punctuation(edition)
            if not edition:
                continue
            if not is_punctuated(edition):
                edition += '.'
            if edition != '1st ed.':
                return edition
        return None

    def _format_primary_mla_author(self, author: str) -> str:
        if author in self.details['corporate_authors']:
            return author
        return clean_name_dates(author)

    @staticmethod
    def _format_secondary_mla_author(author: str) -> str:
        # Names without a comma were already tidied and need no reversal
        if ',' not in author:
            return author
        return reverse_name(strip_punctuation(author))

    def _get_mla_authors(self, et_al_threshold: int = 2) -> Optional[str]:
        """MLA/Chicago author list; the et-al threshold is the main difference."""
        authors = self.details['authors']
        author_str = ''
        if len(authors) > et_al_threshold:
            author_str = self._format_primary_mla_author(authors[0]) + ', et al.'
        else:
            for i, raw_author in enumerate(authors):
                author = self._format_primary_mla_author(raw_author)
                if i + 1 == len(authors) and i > 0:
                    # Comma before "and" only if the list already has commas
                    final_join = ', ' if ',' in author_str else ' '
                    author_str += (final_join + self.translate('and') + ' '
                                   + self._format_secondary_mla_author(author))
                elif i > 0:
                    author_str += ', ' + self._format_secondary_mla_author(author)
                else:
                    author_str += author
        return strip_punctuation(author_str) or None

    def _get_publisher(self, include_pub_place: bool = True) -> Optional[str]:
        parts = []
        if include_pub_place and self.details['pub_place']:
            parts.append(strip_punctuation(self.details['pub_place']))
        if self.details['pub_name']:
            parts.append(self.details['pub_name'])
        if not parts:
            return None
        return strip_punctuation(': '.join(parts))

    def _get_year(self) -> Optional[str]:
        pub_date = self.details['pub_date']
        if pub_date is None:
            return None
        numeric_date = re.sub(r'\D', '', pub_date)
        if len(numeric_date) > 4:
            try:
                return self.date_converter.convert_from_display_date('Y', pub_date)
            except DateError:
                return None
        return numeric_date
