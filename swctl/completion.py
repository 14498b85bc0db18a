"""Shell completion scripts for the command line tool."""

from __future__ import annotations

_BASH_SCRIPT = """
: ${PROG:=$(basename ${BASH_SOURCE})}

_cli_bash_autocomplete() {
  if [[ "${COMP_WORDS[0]}" != "source" ]]; then
    local cur opts base
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"
    if [[ "$cur" == "-"* ]]; then
      opts=$( ${COMP_WORDS[@]:0:$COMP_CWORD} ${cur} --auto_complete )
    else
      opts=$( ${COMP_WORDS[@]:0:$COMP_CWORD} --auto_complete )
    fi
    COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )
    return 0
  fi
}

complete -o bashdefault -o default -o nospace -F _cli_bash_autocomplete $PROG
unset PROG

"""

_POWERSHELL_SCRIPT = """
Register-ArgumentCompleter -Native -CommandName swctl -ScriptBlock {
\tparam($commandName, $commands, $cursorPosition)

\t$match = $($(complete $commands $cursorPosition) -split " ")
\t# Output matched commands one by one.
\tfor($i=0; $i -lt ($match.Length-1); $i+=1){
\t\t  Write-Output $match[$i]
\t}
}
# Find all matching commands.
function complete($commands, $cursorPosition){
\t# Get command line parameters.
\t$parameters = $($commands -split " ")
\t# Uncompleted parameters.
\t$uncomplete = $parameters[-1]

\t# Get the parameters before $uncomplete.
\t$len = $parameters.Length-2
\tif ("$commands".Length -ne $cursorPosition) { return "" }
\t$beforeCommands = $parameters[0..($len)]

\t# Find the command prefixed with $uncomplete.
\t$match = ""
\tInvoke-Expression "$beforeCommands --auto_complete" | ForEach-Object {
\t\t  $flag = 1
\t\t  for ($i=0; $i -lt $uncomplete.Length; $i = $i +1){
\t\t\t\tif ($_[$i] -ne $uncomplete[$i]) { $flag = 0 }
\t\t  }
\t\t  if ($flag -eq 1) {  $match+="$_ " }
\t}
\treturn $match
}

"""

_SCRIPTS = {
    "bash": _BASH_SCRIPT,
    "b": _BASH_SCRIPT,
    "powershell": _POWERSHELL_SCRIPT,
    "p": _POWERSHELL_SCRIPT,
}

SHELLS = ("bash", "powershell")


def script_for(shell: str) -> str:
    """Return the completion script for ``shell`` (a name or its one-letter alias)."""
    try:
        return _SCRIPTS[shell]
    except KeyError:
        raise ValueError(
            f"unsupported shell {shell!r}, expected one of: {', '.join(SHELLS)}"
        ) from None