u"""Progress lines on stdout for the long-running commands.

One line per unit of work:

    Gen 1: bulbasaur...                                 ✓ done
    Gen 1: ivysaur...                                   ✗ error: HTTP 500

On a terminal, interim status (which sub-resource is being fetched) is shown
in place and overwritten when the line finishes.
"""

import sys

#: Labels are truncated and padded to this many characters
LABEL_WIDTH = 46


class ProgressPrinter(object):
    """Prints progress if `verbose`; otherwise only banners and summaries."""

    def __init__(self, verbose, stream=None):
        self.verbose = verbose
        self.stream = stream if stream is not None else sys.stdout
        self.live = verbose and self.stream.isatty()
        self._label = u''
        self._status_width = 0

    def _write(self, text):
        self.stream.write(text)
        self.stream.flush()

    def start(self, label):
        if not self.verbose:
            return
        self._label = u'%s...' % label[:LABEL_WIDTH].ljust(LABEL_WIDTH)
        self._status_width = 0
        self._write(self._label)

    def status(self, msg):
        if not self.live:
            return
        # Pad with spaces to wipe out a longer previous status
        padded = msg.ljust(self._status_width)
        self._status_width = len(msg)
        self._write(u'\r%s%s' % (self._label, padded))

    def done(self, msg):
        if not self.verbose:
            return
        if self.live:
            self._write(u'\r%s%s\n' % (self._label, msg.ljust(self._status_width)))
        else:
            self._write(msg + u'\n')
        self._label = u''
        self._status_width = 0

    def succeeded(self, msg=u'done'):
        self.done(u'✓ ' + msg)

    def failed(self, error):
        self.done(u'✗ error: %s' % (error,))

    def banner(self, *lines):
        rule = u'=' * 33
        self._write(u'\n'.join([rule] + list(lines) + [rule]) + u'\n')

    def report(self, title, report):
        """Banner with a run's summary, then one line per failed Pokémon."""
        self.banner(title, report.summary())
        for subject in report.failed:
            self._write(u"  ✗ %s (#%s): %s\n" % (
                subject.name, subject.pokemon_id, subject.error))
