import os

from mmtax.errors import ConfigError


def is_program_exists(program, dont_raise=False):
    """Returns the full path to an executable `program`, either directly or by searching the PATH"""

    IsExe = lambda p: os.path.isfile(p) and os.access(p, os.X_OK)

    fpath, fname = os.path.split(program)

    if fpath:
        if IsExe(program):
            return program
    else:
        for path in os.environ.get("PATH", "").split(os.pathsep):
            path = os.path.expanduser(path).strip('"')
            if not path:
                continue
            exe_file = os.path.join(path, program)
            if IsExe(exe_file):
                return exe_file

    if dont_raise:
        return False

    raise ConfigError("mmtax needs '%s' to be installed on your system, but it doesn't seem to appear "
                      "in your path :/ If you are certain you have it on your system (for instance you can run it "
                      "by typing '%s' in your terminal window), you may want to check your PATH variable. For MMseqs2, "
                      "`conda install -c bioconda mmseqs2` is the easiest way to get it. Aborting." \
                        % (program, program))
